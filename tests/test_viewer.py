"""Tests for the Flask upload viewer."""

import io

import pytest

import viewer


@pytest.fixture
def client():
    viewer.app.config["TESTING"] = True
    with viewer.app.test_client() as client:
        yield client


@pytest.fixture
def small_upload_limit():
    """Lower the upload limit to 100 bytes for one test."""
    previous = viewer.app.config["MAX_CONTENT_LENGTH"]
    viewer.app.config["MAX_CONTENT_LENGTH"] = 100
    yield 100
    viewer.app.config["MAX_CONTENT_LENGTH"] = previous


def upload(text: str, filename: str = "export.csv") -> dict:
    return {"file": (io.BytesIO(text.encode("utf-8")), filename)}


class TestUploadPage:
    def test_index_has_upload_form(self, client):
        response = client.get("/")
        assert response.status_code == 200
        html = response.get_data(as_text=True)
        assert 'accept=".csv"' in html
        assert "Upload CSV file" in html
        assert "Analysis Results" not in html

    def test_upload_renders_results(self, client, sample_csv):
        response = client.post("/", data=upload(sample_csv), content_type="multipart/form-data")
        assert response.status_code == 200
        html = response.get_data(as_text=True)
        assert "Overtags" in html
        assert "Undertags" in html
        assert "L1 Tags Found" in html
        assert '<div class="entry">Other</div>' in html
        assert '<div class="entry none">None</div>' in html
        assert '<span class="badge">Hate</span>' in html
        assert '<span class="badge">L1A</span>' in html
        assert "Dropped" not in html

    def test_upload_with_bad_header_shows_error_only(self, client, bad_header_csv):
        response = client.post("/", data=upload(bad_header_csv), content_type="multipart/form-data")
        html = response.get_data(as_text=True)
        assert "Invalid CSV format. Please check the column headers." in html
        assert "Analysis Results" not in html

    def test_no_file_selected(self, client):
        response = client.post("/", data={}, content_type="multipart/form-data")
        assert response.status_code == 200
        html = response.get_data(as_text=True)
        assert 'role="alert"' not in html
        assert "Analysis Results" not in html

    def test_tag_text_is_escaped(self, client):
        text = (
            "Task Link,Actioned Date,All Agent Flags,All QA Flags,Agent\n"
            "url1,2024-01-01,<b>x</b>,y,agent1\n"
        )
        html = client.post("/", data=upload(text), content_type="multipart/form-data").get_data(as_text=True)
        assert "&lt;b&gt;x&lt;/b&gt;" in html
        assert "<b>x</b>" not in html

    def test_upload_over_limit_shows_error(self, client, small_upload_limit):
        response = client.post("/", data=upload("x" * 1000), content_type="multipart/form-data")
        assert response.status_code == 413
        html = response.get_data(as_text=True)
        assert "Error parsing CSV: file exceeds 100 bytes limit" in html
        assert 'role="alert"' in html
        assert "Analysis Results" not in html


class TestApi:
    def test_analyze_json(self, client, sample_csv):
        response = client.post("/api/analyze", data=upload(sample_csv), content_type="multipart/form-data")
        assert response.status_code == 200
        results = response.get_json()["results"]
        assert results["overtags"] == [["Other"], "∅"]
        assert results["undertags"] == ["∅", ["Abuse::Hate"]]
        assert results["l1_tags"] == ["Hate", "L1A"]
        assert len(results["data"]) == 3

    def test_analyze_json_error(self, client, bad_header_csv):
        response = client.post("/api/analyze", data=upload(bad_header_csv), content_type="multipart/form-data")
        assert response.status_code == 400
        assert response.get_json() == {"error": "Invalid CSV format. Please check the column headers."}

    def test_analyze_json_without_file(self, client):
        response = client.post("/api/analyze", data={}, content_type="multipart/form-data")
        assert response.status_code == 400
        assert "error" in response.get_json()

    def test_health(self, client):
        assert client.get("/health").get_json() == {"status": "ok"}

    def test_analyze_json_over_limit(self, client, small_upload_limit):
        response = client.post("/api/analyze", data=upload("x" * 1000), content_type="multipart/form-data")
        assert response.status_code == 413
        assert response.get_json() == {"error": "Error parsing CSV: file exceeds 100 bytes limit"}

    def test_limit_is_restored_after_test(self, client, sample_csv):
        assert viewer.app.config["MAX_CONTENT_LENGTH"] == viewer.config.viewer.max_upload_bytes
        response = client.post("/api/analyze", data=upload(sample_csv), content_type="multipart/form-data")
        assert response.status_code == 200


class TestFormatSize:
    def test_whole_megabytes(self):
        assert viewer._format_size(16 * 1024 * 1024) == "16 MB"

    def test_bytes(self):
        assert viewer._format_size(100) == "100 bytes"
        assert viewer._format_size(1024 * 1024 + 1) == "1048577 bytes"
