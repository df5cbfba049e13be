from sqlalchemy import text

from scripts import seed_db


def _url(engine) -> str:
    return engine.url.render_as_string(hide_password=False)


def test_seed_script_reports_summary(capsys, test_engine, count_rows):
    args = ["--database-url", _url(test_engine), "--invoice-id-mode", "deterministic"]
    assert seed_db.main(args) == 0

    out = capsys.readouterr().out
    assert "users: 1 inserted, 0 skipped" in out
    assert "revenue: 12 inserted, 0 skipped" in out

    # Deterministic ids: a second run appends nothing
    assert seed_db.main(args) == 0
    assert "invoices: 0 inserted, 13 skipped" in capsys.readouterr().out
    assert count_rows("invoices") == 13


def test_seed_script_returns_error_status(test_engine):
    with test_engine.begin() as conn:
        conn.execute(text("CREATE TABLE users (id TEXT PRIMARY KEY, name TEXT NOT NULL, email TEXT NOT NULL, password TEXT NOT NULL, role TEXT NOT NULL)"))

    assert seed_db.run(_url(test_engine)) == 1
