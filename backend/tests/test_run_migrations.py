"""Tests for the migration runner's file handling."""

from unittest.mock import MagicMock

from run_migrations import MIGRATIONS_DIR, apply, checksum_of, load_migrations, partition


class TestLoadMigrations:
    def test_sorted_by_name(self, tmp_path):
        (tmp_path / "002_b.sql").write_text("SELECT 2;")
        (tmp_path / "001_a.sql").write_text("SELECT 1;")
        (tmp_path / "notes.txt").write_text("ignored")

        migrations = load_migrations(tmp_path)

        assert [m.name for m in migrations] == ["001_a.sql", "002_b.sql"]
        assert migrations[0].checksum == checksum_of("SELECT 1;")
        assert migrations[0].sql == "SELECT 1;"

    def test_missing_directory(self, tmp_path):
        assert load_migrations(tmp_path / "nope") == []

    def test_bundled_migrations(self):
        names = [m.name for m in load_migrations(MIGRATIONS_DIR)]
        assert names == ["001_users.sql", "002_profiles.sql"]


class TestPartition:
    def test_pending_and_changed(self, tmp_path):
        (tmp_path / "001_a.sql").write_text("SELECT 1;")
        (tmp_path / "002_b.sql").write_text("SELECT 2;")
        (tmp_path / "003_c.sql").write_text("SELECT 3;")
        migrations = load_migrations(tmp_path)

        pending, changed = partition(
            migrations,
            {"001_a.sql": checksum_of("SELECT 1;"), "002_b.sql": "stale"},
        )

        assert [m.name for m in pending] == ["003_c.sql"]
        assert [m.name for m in changed] == ["002_b.sql"]


class TestApply:
    def test_dry_run_touches_nothing(self, tmp_path):
        (tmp_path / "001_a.sql").write_text("SELECT 1;")
        conn = MagicMock()

        apply(conn, load_migrations(tmp_path)[0], dry_run=True)

        conn.cursor.assert_not_called()
        conn.commit.assert_not_called()

    def test_runs_and_records(self, tmp_path):
        (tmp_path / "001_a.sql").write_text("SELECT 1;")
        conn = MagicMock()
        cursor = conn.cursor.return_value.__enter__.return_value

        apply(conn, load_migrations(tmp_path)[0])

        assert cursor.execute.call_count == 2
        assert cursor.execute.call_args_list[0].args[0] == "SELECT 1;"
        conn.commit.assert_called_once()
