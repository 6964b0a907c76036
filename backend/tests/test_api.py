import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from app import create_app
from core.dependencies import get_results_service
from core.middleware import RateLimitingMiddleware
from services.analysis_results_service import AnalysisResultsService
from services.rephrase_service import RephraseEngine
from tests.fakes import FailingRephraser, StubRephraser

OFFENSIVE = "I hate this stupid product, it sucks"
NEUTRAL = "The weather is pleasant and calm today"


def test_root(client: TestClient):
    res = client.get("/")
    assert res.status_code == 200
    assert res.json()["health"] == "/api/health"


def test_health_ok(client: TestClient):
    res = client.get("/api/health")
    assert res.status_code == 200
    data = res.json()
    assert data["status"] == "healthy"
    assert data["rephrase_provider"] == "rules"
    assert data["database_available"] is True
    assert "version" in data


def test_responses_carry_timing_header(client: TestClient):
    res = client.get("/api/health")
    assert "x-process-time-ms" in res.headers


def test_sentiment_ok(client: TestClient):
    res = client.post("/api/analyze/sentiment", json={"text": "This is terrible and awful"})
    assert res.status_code == 200
    assert res.json() == {"score": 0.0, "label": "negative", "isNegative": True}


def test_sentiment_threshold_applies(client: TestClient):
    text = " ".join(["word"] * 41)
    res = client.post("/api/analyze/sentiment", json={"text": text, "threshold": 0.6})
    assert res.json()["isNegative"] is True


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"text": ""},
        {"text": "fine text here", "threshold": 1.5},
    ],
)
def test_sentiment_rejects_malformed_requests(client: TestClient, body):
    res = client.post("/api/analyze/sentiment", json=body)
    assert res.status_code == 400
    data = res.json()
    assert data["error"] == "validation_error"
    assert data["errors"]


def test_rephrase_defaults_to_negative(client: TestClient):
    res = client.post("/api/rephrase", json={"text": "I hate this product"})
    assert res.status_code == 200
    data = res.json()
    assert data["type"] == "negative"
    assert data["original"] == "I hate this product"
    assert data["rephrased"].startswith("While there are challenges with I'm not fond of this product")


def test_rephrase_warning(client: TestClient):
    res = client.post("/api/rephrase", json={"text": OFFENSIVE, "type": "warning"})
    assert res.json() == {
        "original": OFFENSIVE,
        "rephrased": "I dislike this misguided product, it is inadequate",
        "type": "warning",
    }


def test_rephrase_rejects_unknown_type(client: TestClient):
    res = client.post("/api/rephrase", json={"text": OFFENSIVE, "type": "sarcasm"})
    assert res.status_code == 400


def test_rephrase_rejects_non_json(client: TestClient):
    res = client.post("/api/rephrase", content=b"not json", headers={"Content-Type": "application/json"})
    assert res.status_code == 400


def test_remote_failure_still_answers(app_settings):
    remote = FailingRephraser()
    with TestClient(create_app(app_settings, rephrase_engine=RephraseEngine(remote))) as client:
        assert client.get("/api/health").json()["rephrase_provider"] == "failing"

        res = client.post("/api/rephrase", json={"text": OFFENSIVE, "type": "warning"})

    assert res.status_code == 200
    assert res.json()["rephrased"] == "I dislike this misguided product, it is inadequate"
    assert remote.calls == 1


def test_remote_rephrasing(app_settings):
    engine = RephraseEngine(StubRephraser("A kinder sentence."))
    with TestClient(create_app(app_settings, rephrase_engine=engine)) as client:
        res = client.post("/api/rephrase", json={"text": OFFENSIVE, "type": "warning"})

    assert res.json()["rephrased"] == "A kinder sentence."


def test_classify(client: TestClient):
    assert client.post("/api/analyze/classify", json={"text": OFFENSIVE}).json() == {"type": "warning"}
    assert client.post("/api/analyze/classify", json={"text": NEUTRAL}).json() == {"type": None}


def test_classify_uses_extension_settings(client: TestClient):
    res = client.post(
        "/api/analyze/classify",
        json={"text": OFFENSIVE, "settings": {"contentDetection": False}},
    )
    assert res.json() == {"type": "negative"}


def test_page_scan_persists_flagged_units(client: TestClient):
    res = client.post(
        "/api/analyze/page",
        json={
            "url": "https://news.example.com/story?id=7",
            "units": [
                {"id": "u1", "text": OFFENSIVE},
                {"id": "u2", "text": NEUTRAL},
                {"id": "u3", "text": "too short"},
            ],
        },
    )

    assert res.status_code == 200
    data = res.json()
    assert data["domain"] == "news.example.com"
    assert (data["scanned"], data["flagged"], data["failed"]) == (3, 1, 0)

    [result] = data["results"]
    assert result["unitId"] == "u1"
    assert result["type"] == "warning"
    assert result["originalContent"] == OFFENSIVE
    assert result["rephrasedContent"] == "I dislike this misguided product, it is inadequate"
    assert isinstance(result["recordId"], int)

    [stored] = client.get("/api/analysis-results").json()
    assert stored["id"] == result["recordId"]
    assert stored["url"] == "https://news.example.com/story?id=7"
    assert stored["domain"] == "news.example.com"


def test_page_scan_without_persisting(client: TestClient):
    res = client.post(
        "/api/analyze/page",
        json={"url": "https://example.com", "persist": False, "units": [{"text": OFFENSIVE}]},
    )

    assert res.json()["results"][0]["recordId"] is None
    assert client.get("/api/analysis-results").json() == []


def test_page_scan_trims_unit_text(client: TestClient):
    res = client.post(
        "/api/analyze/page",
        json={"url": "https://example.com", "units": [{"id": "pad", "text": "      hell"}, {"text": f"\n  {OFFENSIVE}  "}]},
    )

    data = res.json()
    assert data["flagged"] == 1
    assert data["results"][0]["originalContent"] == OFFENSIVE
    assert [item["originalContent"] for item in client.get("/api/analysis-results").json()] == [OFFENSIVE]


def test_page_scan_reports_only_records_that_are_kept(app_settings):
    settings = app_settings.model_copy(update={"analysis_results_max_kept": 2})
    units = [{"id": f"u{i}", "text": f"{OFFENSIVE} number {i}"} for i in range(4)]

    with TestClient(create_app(settings)) as client:
        data = client.post("/api/analyze/page", json={"url": "https://example.com", "units": units}).json()
        stored = client.get("/api/analysis-results").json()
        returned = [result["recordId"] for result in data["results"]]

        assert data["flagged"] == 4
        assert returned[:2] == [None, None]
        assert sorted(returned[2:]) == sorted(item["id"] for item in stored)
        for record_id in returned[2:]:
            assert client.delete(f"/api/analysis-results/{record_id}").status_code == 204


class BrokenResultsService(AnalysisResultsService):
    async def create_result(self, db, **fields):
        raise OperationalError("INSERT INTO analysis_result", {}, Exception("disk I/O error"))


def test_page_scan_survives_storage_errors(client: TestClient):
    client.app.dependency_overrides[get_results_service] = lambda: BrokenResultsService()
    res = client.post("/api/analyze/page", json={"url": "https://example.com", "units": [{"text": OFFENSIVE}]})

    assert res.status_code == 200
    assert res.json()["flagged"] == 1
    assert res.json()["results"][0]["recordId"] is None


def test_rate_limiter_forgets_idle_clients():
    limiter = RateLimitingMiddleware(app=None, paths=["/api/rephrase"], calls_per_minute=2)
    limiter.request_times = {"10.0.0.1": [0.0, 10.0], "10.0.0.2": [100.0], "10.0.0.3": []}

    limiter.evict_idle(120.0)

    assert limiter.request_times == {"10.0.0.2": [100.0]}


def test_page_scan_with_rephrasing_disabled(client: TestClient):
    res = client.post(
        "/api/analyze/page",
        json={
            "url": "https://example.com",
            "settings": {"contentRephrasing": False},
            "units": [{"text": OFFENSIVE}],
        },
    )

    assert res.json()["flagged"] == 0


def test_page_scan_requires_units(client: TestClient):
    res = client.post("/api/analyze/page", json={"url": "https://example.com", "units": []})
    assert res.status_code == 400


def test_page_scan_unit_limit(app_settings):
    settings = app_settings.model_copy(update={"scan_max_units": 1})
    with TestClient(create_app(settings)) as client:
        res = client.post(
            "/api/analyze/page",
            json={"url": "https://example.com", "units": [{"text": NEUTRAL}, {"text": NEUTRAL}]},
        )

    assert res.status_code == 400
    assert "Too many text units" in res.json()["message"]


def test_rephrase_is_rate_limited(app_settings):
    settings = app_settings.model_copy(update={"rephrase_rate_limit_per_minute": 2})
    with TestClient(create_app(settings)) as client:
        codes = [client.post("/api/rephrase", json={"text": OFFENSIVE}).status_code for _ in range(3)]
        sentiment = client.post("/api/analyze/sentiment", json={"text": OFFENSIVE})

    assert codes == [200, 200, 429]
    assert sentiment.status_code == 200
