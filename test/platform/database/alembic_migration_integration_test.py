"""
Integration test for the Alembic migrations

Runs the migration chain through the async env.py against a fresh SQLite file,
the same driver family the app uses.
"""

from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from stagepass.platform.constant.path import ALEMBIC_DIR


def _alembic_config(db_file: Path) -> Config:
    # No ini file: keeps alembic from reconfiguring the test process logging
    config = Config()
    config.set_main_option('script_location', str(ALEMBIC_DIR))
    config.set_main_option('sqlalchemy.url', f'sqlite+aiosqlite:///{db_file}')
    return config


def _table_names(db_file: Path) -> set[str]:
    engine = create_engine(f'sqlite:///{db_file}')
    try:
        return set(inspect(engine).get_table_names())
    finally:
        engine.dispose()


class TestAlembicMigrations:
    def test_upgrade_head_creates_schema(self, tmp_path: Path) -> None:
        db_file = tmp_path / 'migrated.db'

        command.upgrade(_alembic_config(db_file), 'head')

        assert {'user', 'venue', 'concert', 'reservation', 'alembic_version'} <= _table_names(
            db_file
        )

    def test_downgrade_base_drops_schema(self, tmp_path: Path) -> None:
        db_file = tmp_path / 'migrated.db'
        config = _alembic_config(db_file)
        command.upgrade(config, 'head')

        command.downgrade(config, 'base')

        assert _table_names(db_file) == {'alembic_version'}
