"""Tests for the storage reconciliation command line script."""

from __future__ import annotations

from io import BytesIO

from app.application.use_cases.documents import list_documents, upload_document
from app.config import reset_settings_cache
from scripts.reconcile_storage import main


def _configure_environment(monkeypatch, settings) -> None:
    monkeypatch.setenv("DATABASE_URL", settings.database_url)
    monkeypatch.setenv("BASE_DIR", str(settings.base_dir))
    monkeypatch.setenv("STORAGE_DIR", settings.storage_dir)
    reset_settings_cache()


def test_dry_run_only_reports(monkeypatch, capsys, settings, database, storage, make_pdf) -> None:
    _configure_environment(monkeypatch, settings)
    orphan = storage.save(BytesIO(make_pdf(32)))

    main(["--dry-run"])

    output = capsys.readouterr().out
    assert "dry run" in output
    assert orphan.filepath in output
    assert storage.exists(orphan.filepath)
    reset_settings_cache()


def test_sweep_removes_rows_without_blob(monkeypatch, capsys, settings, database, storage, make_pdf) -> None:
    _configure_environment(monkeypatch, settings)
    with database.session() as session:
        document = upload_document(
            session, storage, filename="gone.pdf", stream=BytesIO(make_pdf(32))
        )
    storage.remove(document.filepath)

    main([])

    assert "Reconciliation finished" in capsys.readouterr().out
    with database.session() as session:
        assert list_documents(session) == []
    reset_settings_cache()


def test_sweep_reports_staged_blobs(monkeypatch, capsys, settings, database, storage, make_pdf) -> None:
    _configure_environment(monkeypatch, settings)
    leftover = storage.save(BytesIO(make_pdf(32)))
    storage.stage_removal(leftover.filepath)

    main([])

    output = capsys.readouterr().out
    assert f"Staged files purged: ['{leftover.filepath}']" in output
    assert list(storage.iter_staged()) == []
    reset_settings_cache()
