from pathlib import Path

import pytest

from ..core.db import ConnectionProvider, create_engine_for_url, run_sql_script

TESTDATA_SQL = Path(__file__).with_name("testdata.sql")


@pytest.fixture
def provider(tmp_path) -> ConnectionProvider:
    engine = create_engine_for_url(f"sqlite:///{tmp_path / 'test.db'}")
    run_sql_script(engine, TESTDATA_SQL)
    connection_provider = ConnectionProvider(engine)
    yield connection_provider
    connection_provider.dispose()


@pytest.fixture
def empty_provider(tmp_path) -> ConnectionProvider:
    """Provider over a database that was never bootstrapped."""
    engine = create_engine_for_url(f"sqlite:///{tmp_path / 'empty.db'}")
    connection_provider = ConnectionProvider(engine)
    yield connection_provider
    connection_provider.dispose()
