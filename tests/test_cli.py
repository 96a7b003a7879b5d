"""Tests for CLI commands."""

import json
import re
import sqlite3
from pathlib import Path

import pytest
from click.testing import CliRunner

from dsdialect.cli.main import cli
from dsdialect.db.connection import reset_connection_manager


def strip_ansi(text: str) -> str:
    """Remove ANSI escape codes from text."""
    ansi_escape = re.compile(r'\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])')
    return ansi_escape.sub('', text)


def flat(text: str) -> str:
    """Strip ANSI codes and collapse the line wrapping rich applies."""
    return " ".join(strip_ansi(text).split())


@pytest.fixture
def temp_db(tmp_path: Path) -> Path:
    """Create a temporary SQLite database with two tables."""
    db_path = tmp_path / "shop.db"
    conn = sqlite3.connect(db_path)
    conn.executescript("""
        CREATE TABLE users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL
        );
        CREATE TABLE orders (
            id INTEGER PRIMARY KEY,
            user_id INTEGER REFERENCES users (id)
        );
        INSERT INTO users (name) VALUES ('Alice'), ('Bob');
    """)
    conn.commit()
    conn.close()
    return db_path


@pytest.fixture
def temp_config(tmp_path: Path, temp_db: Path) -> str:
    """Create a configuration file pointing at the temporary database."""
    config_path = tmp_path / "dsdialect.yaml"
    config_path.write_text(
        f"""
databases:
  test:
    type: sqlite
    path: {temp_db}
default_database: test
""",
        encoding="utf-8",
    )
    return str(config_path)


@pytest.fixture(autouse=True)
def cleanup_connections():
    reset_connection_manager()
    yield
    reset_connection_manager()


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestCLIBasic:
    def test_help(self, runner):
        result = runner.invoke(cli, ['--help'])
        assert result.exit_code == 0
        assert 'dsdialect' in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ['--version'])
        assert result.exit_code == 0
        assert 'dsdialect v' in result.output

    def test_dialects(self, runner):
        result = runner.invoke(cli, ['dialects'])
        assert result.exit_code == 0
        output = strip_ansi(result.output)
        for name in ('mysql', 'sqlite', 'postgresql', 'oracle', 'sqlserver'):
            assert name in output

    def test_dialects_json(self, runner):
        result = runner.invoke(cli, ['--output', 'json', 'dialects'])
        assert result.exit_code == 0
        assert json.loads(result.output) == ['mysql', 'oracle', 'postgresql', 'sqlite', 'sqlserver']


class TestCLIDatastore:
    def test_tables(self, runner, temp_config):
        result = runner.invoke(cli, ['--config', temp_config, 'tables'])
        assert result.exit_code == 0
        output = strip_ansi(result.output)
        assert 'users' in output
        assert 'orders' in output
        assert 'sqlite_sequence' not in output

    def test_tables_json(self, runner, temp_config):
        result = runner.invoke(cli, ['--config', temp_config, '--output', 'json', 'tables', '-d', 'shop'])
        assert result.exit_code == 0
        assert sorted(json.loads(result.output)) == ['orders', 'users']

    def test_current_and_datastores(self, runner, temp_config):
        result = runner.invoke(cli, ['--config', temp_config, 'current'])
        assert result.exit_code == 0
        assert result.output.strip() == 'shop.db'

        result = runner.invoke(cli, ['--config', temp_config, '--output', 'json', 'datastores'])
        assert result.exit_code == 0
        assert json.loads(result.output) == ['shop.db']

    def test_sequence(self, runner, temp_config):
        result = runner.invoke(cli, ['--config', temp_config, 'sequence', 'users'])
        assert result.exit_code == 0
        assert result.output.strip() == '3'

    def test_key_unsupported(self, runner, temp_config):
        result = runner.invoke(cli, ['--config', temp_config, 'key', 'users'])
        assert result.exit_code == 0
        assert 'No primary key found' in flat(result.output)

    def test_table_lifecycle(self, runner, temp_config):
        result = runner.invoke(cli, ['--config', temp_config, 'create-table', 'audit', 'id INTEGER, note TEXT'])
        assert result.exit_code == 0
        assert "Table 'audit' created" in flat(result.output)

        result = runner.invoke(cli, ['--config', temp_config, 'drop-table', 'audit', '--yes'])
        assert result.exit_code == 0

        result = runner.invoke(cli, ['--config', temp_config, '--output', 'json', 'tables'])
        assert 'audit' not in json.loads(result.output)

    def test_drop_datastore(self, runner, temp_config):
        result = runner.invoke(cli, ['--config', temp_config, 'drop-datastore', 'shop', '--yes'])
        assert result.exit_code == 0

        result = runner.invoke(cli, ['--config', temp_config, '--output', 'json', 'tables'])
        assert json.loads(result.output) == []

    def test_drop_datastore_requires_confirmation(self, runner, temp_config):
        result = runner.invoke(cli, ['--config', temp_config, 'drop-datastore', 'shop'], input='n\n')
        assert result.exit_code != 0

        result = runner.invoke(cli, ['--config', temp_config, '--output', 'json', 'tables'])
        assert sorted(json.loads(result.output)) == ['orders', 'users']

    def test_failure_exits_with_error(self, runner, temp_config):
        result = runner.invoke(cli, ['--config', temp_config, 'drop-table', 'missing', '--yes'])
        assert result.exit_code == 1
        assert 'Error' in flat(result.output)

    def test_unknown_database(self, runner, temp_config):
        result = runner.invoke(cli, ['--config', temp_config, '--db', 'nope', 'tables'])
        assert result.exit_code == 1
        assert 'not found in configuration' in flat(result.output)


class TestCLIConfig:
    def test_sample(self, runner, tmp_path):
        config_path = tmp_path / 'sample.yaml'
        result = runner.invoke(cli, ['config', 'sample', str(config_path)])
        assert result.exit_code == 0
        assert 'Sample configuration created' in flat(result.output)
        assert config_path.exists()

    def test_validate(self, runner, temp_config):
        result = runner.invoke(cli, ['config', 'validate', temp_config])
        assert result.exit_code == 0
        assert 'is valid' in flat(result.output)

    def test_validate_invalid(self, runner, tmp_path):
        bad = tmp_path / 'bad.yaml'
        bad.write_text('databases: invalid_structure', encoding='utf-8')
        result = runner.invoke(cli, ['config', 'validate', str(bad)])
        assert result.exit_code == 1
        assert 'validation failed' in flat(result.output)
