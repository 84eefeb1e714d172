from unittest.mock import MagicMock, patch

import pytest
import requests

import pubmed_client
from config import Settings
from pubmed_client import PubMedRequestError, fetch_articles_for_query, fetch_details, search_pmids

SETTINGS = Settings(
    notion_api_key="secret",
    notion_database_id="db-123",
    query_source_path="queries.csv",
)

EFETCH_XML = b"""<?xml version="1.0"?>
<PubmedArticleSet>
  <PubmedArticle>
    <MedlineCitation>
      <PMID Version="1">111</PMID>
      <Article>
        <Journal><JournalIssue><PubDate><Year>2021</Year><Month>Mar</Month><Day>15</Day></PubDate></JournalIssue></Journal>
        <ArticleTitle>Vaccine efficacy</ArticleTitle>
        <Abstract><AbstractText>Efficacy was high.</AbstractText></Abstract>
      </Article>
    </MedlineCitation>
    <PubmedData><ArticleIdList><ArticleId IdType="pubmed">111</ArticleId></ArticleIdList></PubmedData>
  </PubmedArticle>
  <PubmedArticle>
    <MedlineCitation>
      <PMID Version="1">222</PMID>
      <Article>
        <ArticleTitle>Booster response</ArticleTitle>
      </Article>
    </MedlineCitation>
    <PubmedData><ArticleIdList><ArticleId IdType="doi">10.1000/x</ArticleId></ArticleIdList></PubmedData>
  </PubmedArticle>
</PubmedArticleSet>
"""


def _mock_resp(status_code: int = 200, payload: object = None, content: bytes = b"", text: str = "") -> MagicMock:
    mock = MagicMock()
    mock.status_code = status_code
    mock.json.return_value = payload
    mock.content = content
    mock.text = text
    return mock


def test_search_pmids_sends_expected_params() -> None:
    payload = {"esearchresult": {"idlist": ["111", "222"]}}

    with patch("pubmed_client.requests.get", return_value=_mock_resp(payload=payload)) as mock_get:
        pmids = search_pmids("covid-19 vaccine", SETTINGS)

    assert pmids == ["111", "222"]
    args, kwargs = mock_get.call_args
    assert args[0] == pubmed_client.ESEARCH_URL
    assert kwargs["params"] == {
        "db": "pubmed",
        "retmode": "json",
        "sort": "pub_date",
        "retmax": "20",
        "term": "covid-19 vaccine",
    }


def test_search_pmids_adds_ncbi_api_key_when_configured() -> None:
    settings = Settings(
        notion_api_key="secret",
        notion_database_id="db-123",
        query_source_path="queries.csv",
        ncbi_api_key="ncbi-key",
    )
    payload = {"esearchresult": {"idlist": []}}

    with patch("pubmed_client.requests.get", return_value=_mock_resp(payload=payload)) as mock_get:
        search_pmids("asthma", settings)

    assert mock_get.call_args.kwargs["params"]["api_key"] == "ncbi-key"


@pytest.mark.parametrize("payload", [
    {},
    {"esearchresult": None},
    {"esearchresult": {}},
    {"esearchresult": {"idlist": "111"}},
    [],
    None,
])
def test_search_pmids_malformed_payload_yields_empty_list(payload: object) -> None:
    with patch("pubmed_client.requests.get", return_value=_mock_resp(payload=payload)):
        assert search_pmids("anything", SETTINGS) == []


def test_search_pmids_non_200_raises_with_status_and_body() -> None:
    with patch("pubmed_client.requests.get", return_value=_mock_resp(status_code=503, text="busy")):
        with pytest.raises(PubMedRequestError) as excinfo:
            search_pmids("anything", SETTINGS)

    assert excinfo.value.status_code == 503
    assert excinfo.value.body == "busy"
    assert "HTTP 503" in str(excinfo.value)


def test_fetch_details_joins_ids_in_one_call() -> None:
    with patch("pubmed_client.requests.get", return_value=_mock_resp(content=EFETCH_XML)) as mock_get:
        document = fetch_details(["111", "222"], SETTINGS)

    assert document == EFETCH_XML
    mock_get.assert_called_once()
    assert mock_get.call_args.args[0] == pubmed_client.EFETCH_URL
    assert mock_get.call_args.kwargs["params"] == {"db": "pubmed", "retmode": "xml", "id": "111,222"}


def test_fetch_details_non_200_raises() -> None:
    with patch("pubmed_client.requests.get", return_value=_mock_resp(status_code=500, text="oops")):
        with pytest.raises(PubMedRequestError, match="efetch"):
            fetch_details(["111"], SETTINGS)


def test_fetch_details_rejects_empty_batch() -> None:
    with patch("pubmed_client.requests.get") as mock_get:
        with pytest.raises(ValueError):
            fetch_details([], SETTINGS)
    mock_get.assert_not_called()


def test_fetch_articles_for_query_skips_efetch_when_no_hits() -> None:
    with patch("pubmed_client.search_pmids", return_value=[]), \
         patch("pubmed_client.fetch_details") as mock_fetch:
        articles = fetch_articles_for_query("nothing matches", SETTINGS)

    assert articles == []
    mock_fetch.assert_not_called()


def test_fetch_articles_for_query_end_to_end() -> None:
    search_resp = _mock_resp(payload={"esearchresult": {"idlist": ["111", "222"]}})
    fetch_resp = _mock_resp(content=EFETCH_XML)

    with patch("pubmed_client.requests.get", side_effect=[search_resp, fetch_resp]):
        articles = fetch_articles_for_query("covid-19 vaccine", SETTINGS)

    assert [a.pmid for a in articles] == ["111", "222"]
    assert articles[0].doi == ""
    assert articles[0].pub_date == "2021-03-15"
    assert articles[1].doi == "10.1000/x"
    assert articles[1].pub_date is None


def test_fetch_articles_for_query_propagates_transport_errors() -> None:
    with patch("pubmed_client.requests.get", side_effect=requests.ConnectionError("down")):
        with pytest.raises(requests.ConnectionError):
            fetch_articles_for_query("asthma", SETTINGS)
