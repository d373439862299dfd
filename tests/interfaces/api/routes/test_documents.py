"""Integration tests for the document registry endpoints."""

from __future__ import annotations

from datetime import datetime, timedelta
from io import BytesIO

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.entities import Document
from app.infrastructure.database import Database
from app.infrastructure.repositories import DocumentRepository
from app.infrastructure.storage import DocumentStorage
from main import create_app


@pytest.fixture()
def client(settings):
    """Return a test client bound to an application using temporary storage."""

    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


def _stored_blobs(settings) -> list[str]:
    return sorted(entry.name for entry in settings.storage_path.iterdir())


def _upload(client: TestClient, content: bytes, *, filename: str = "report.pdf", content_type: str = "application/pdf"):
    return client.post(
        "/documents/upload",
        files={"file": (filename, content, content_type)},
    )


def test_document_lifecycle(client: TestClient, settings, make_pdf) -> None:
    """Upload, list, download and delete a document end to end."""

    content = make_pdf(2048)

    upload_response = _upload(client, content)
    assert upload_response.status_code == 201
    payload = upload_response.json()
    assert payload["message"] == "Uploaded Successfully"
    doc = payload["doc"]
    assert doc["filename"] == "report.pdf"
    assert doc["filesize"] == 2048
    assert doc["createdAt"]
    assert doc["filepath"].startswith("uploads/")

    list_response = client.get("/documents")
    assert list_response.status_code == 200
    assert list_response.json() == [doc]

    download_response = client.get(f"/documents/{doc['id']}")
    assert download_response.status_code == 200
    assert download_response.content == content
    assert download_response.headers["content-type"] == "application/pdf"
    assert 'filename="report.pdf"' in download_response.headers["content-disposition"]

    delete_response = client.delete(f"/documents/{doc['id']}")
    assert delete_response.status_code == 200
    assert delete_response.json() == {"message": "Deleted Successfully"}

    assert client.get("/documents").json() == []
    assert _stored_blobs(settings) == []


def test_upload_stores_exactly_one_blob(client: TestClient, settings, make_pdf) -> None:
    response = _upload(client, make_pdf(4096))

    assert response.status_code == 201
    blobs = _stored_blobs(settings)
    assert len(blobs) == 1
    assert response.json()["doc"]["filepath"] == f"uploads/{blobs[0]}"
    assert (settings.storage_path / blobs[0]).stat().st_size == 4096


def test_same_filename_uploads_do_not_overwrite(client: TestClient, settings, make_pdf) -> None:
    first = _upload(client, make_pdf(100)).json()["doc"]
    second = _upload(client, make_pdf(200)).json()["doc"]

    assert first["filepath"] != second["filepath"]
    assert len(_stored_blobs(settings)) == 2


def test_upload_rejects_non_pdf(client: TestClient, settings) -> None:
    response = _upload(client, b"plain text", filename="notes.txt", content_type="text/plain")

    assert response.status_code == 400
    assert response.json()["detail"] == "Only PDF files are allowed"
    assert client.get("/documents").json() == []
    assert _stored_blobs(settings) == []


def test_upload_trusts_declared_content_type(client: TestClient) -> None:
    response = _upload(client, b"not really a pdf", filename="renamed.pdf")

    assert response.status_code == 201


def test_upload_without_file_is_rejected(client: TestClient) -> None:
    response = client.post("/documents/upload", data={"note": "no attachment"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Please upload a PDF file"


def test_upload_rejects_multiple_files(client: TestClient, settings, make_pdf) -> None:
    response = client.post(
        "/documents/upload",
        files=[
            ("file", ("a.pdf", make_pdf(64), "application/pdf")),
            ("file", ("b.pdf", make_pdf(64), "application/pdf")),
        ],
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Only one file may be uploaded per request"
    assert _stored_blobs(settings) == []


def test_upload_rejects_unexpected_file_field(client: TestClient, make_pdf) -> None:
    response = client.post(
        "/documents/upload",
        files={"attachment": ("a.pdf", make_pdf(64), "application/pdf")},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Unexpected file field 'attachment'"


def test_upload_store_failure_returns_500_and_discards_blob(
    client: TestClient, settings, make_pdf, monkeypatch: pytest.MonkeyPatch
) -> None:
    def failing_commit(self: Session) -> None:
        raise SQLAlchemyError("database is locked")

    monkeypatch.setattr(Session, "commit", failing_commit)

    response = _upload(client, make_pdf(512))

    assert response.status_code == 500
    assert response.json()["detail"] == "Upload failed"
    assert _stored_blobs(settings) == []


def test_list_orders_by_creation_time_descending(client: TestClient) -> None:
    database = client.app.state.database
    timestamps = {
        "t1.pdf": datetime(2024, 1, 1, 9, 0, 0),
        "t3.pdf": datetime(2024, 1, 1, 11, 0, 0),
        "t2.pdf": datetime(2024, 1, 1, 10, 0, 0),
    }
    with database.session() as session:
        repository = DocumentRepository(session)
        for name, created_at in timestamps.items():
            repository.add(
                Document(
                    id=None,
                    filename=name,
                    filepath=f"uploads/{name}",
                    filesize=1,
                    created_at=created_at,
                )
            )
        session.commit()

    response = client.get("/documents/")

    assert response.status_code == 200
    assert [doc["filename"] for doc in response.json()] == ["t3.pdf", "t2.pdf", "t1.pdf"]


def test_download_unknown_document_returns_404(client: TestClient) -> None:
    response = client.get("/documents/999999")

    assert response.status_code == 404
    assert response.json() == {"detail": "File not found"}


def test_download_with_missing_blob_returns_500(client: TestClient, settings, make_pdf) -> None:
    doc = _upload(client, make_pdf(256)).json()["doc"]
    (settings.base_dir / doc["filepath"]).unlink()

    response = client.get(f"/documents/{doc['id']}")

    assert response.status_code == 500
    assert response.json()["detail"] == "Download failed"


def test_non_numeric_id_is_rejected(client: TestClient) -> None:
    assert client.get("/documents/abc").status_code == 422


def test_delete_tolerates_missing_blob_and_second_delete_is_404(
    client: TestClient, settings, make_pdf
) -> None:
    doc = _upload(client, make_pdf(256)).json()["doc"]
    (settings.base_dir / doc["filepath"]).unlink()

    first = client.delete(f"/documents/{doc['id']}")
    second = client.delete(f"/documents/{doc['id']}")

    assert first.status_code == 200
    assert second.status_code == 404
    assert second.json()["detail"] == "File not found"
    assert client.get("/documents").json() == []


def test_delete_store_failure_keeps_row_and_blob(
    client: TestClient, settings, make_pdf, monkeypatch: pytest.MonkeyPatch
) -> None:
    doc = _upload(client, make_pdf(256)).json()["doc"]

    def failing_commit(self: Session) -> None:
        raise SQLAlchemyError("disk I/O error")

    monkeypatch.setattr(Session, "commit", failing_commit)
    response = client.delete(f"/documents/{doc['id']}")
    monkeypatch.undo()

    assert response.status_code == 500
    assert response.json()["detail"] == "Deletion failed"
    assert (settings.base_dir / doc["filepath"]).is_file()
    assert [item["id"] for item in client.get("/documents").json()] == [doc["id"]]


def test_cors_allows_any_origin(client: TestClient) -> None:
    response = client.get("/documents", headers={"Origin": "http://portal.example"})

    assert response.headers["access-control-allow-origin"] == "*"


def test_index_serves_client_page(client: TestClient) -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "Patient Document Portal" in response.text
    assert "/documents" in response.text


def test_startup_reconciliation_repairs_drift(settings, make_pdf) -> None:
    settings = settings.model_copy(update={"reconcile_on_startup": True})
    database = Database(settings.database_url)
    database.create_all()
    storage = DocumentStorage(settings.base_dir, settings.storage_dir)
    storage.ensure_directory()
    orphan = storage.save(BytesIO(make_pdf(64)))
    with database.session() as session:
        DocumentRepository(session).add(
            Document(
                id=None,
                filename="vanished.pdf",
                filepath=f"{settings.storage_dir}/vanished.pdf",
                filesize=64,
                created_at=None,
            )
        )
        session.commit()
    database.dispose()

    with TestClient(create_app(settings)) as client:
        assert client.get("/documents").json() == []

    assert not storage.exists(orphan.filepath)
    assert _stored_blobs(settings) == []


def test_created_at_carries_configured_offset(settings, make_pdf) -> None:
    settings = settings.model_copy(update={"app_timezone": "UTC+02:00"})

    with TestClient(create_app(settings)) as client:
        doc = _upload(client, make_pdf(128)).json()["doc"]
        listed = client.get("/documents").json()

    created_at = datetime.fromisoformat(doc["createdAt"])
    assert created_at.utcoffset() == timedelta(hours=2)
    assert listed[0]["createdAt"] == doc["createdAt"]
