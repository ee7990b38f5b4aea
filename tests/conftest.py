"""
PXE Boot Server Store - Global Test Configuration
Pytest configuration with fixtures shared by all test suites
"""

import pytest

# Environment variables read by DatabaseConfig.from_env()
DB_ENV_VARS = [
    'DB_TYPE',
    'DB_HOST',
    'DB_PORT',
    'DB_USER',
    'DB_PASS',
    'DB_NAME',
    'DB_SSLMODE',
    'DB_CONNECT_TIMEOUT',
    'DB_POOL_SIZE',
    'PYDAL_FOLDER',
    'LOG_LEVEL',
]


@pytest.fixture(scope='function')
def clean_env(monkeypatch):
    """Remove store settings from the environment for the duration of a test."""
    for name in DB_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture(scope='function')
def sample_server_data():
    """Provide sample server data for testing."""
    return {
        'gateway': '10.0.0.1',
        'hostname': 'node1',
        'ip': '10.0.0.5',
        'netmask': '255.255.255.0',
        'mac_address': 'AA:BB:CC:DD:EE:FF',
    }
