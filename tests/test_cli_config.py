"""Tests for CLI configuration module."""

import json

import pytest
from pydantic import ValidationError

from cli.config import Config
from common.constants import DEFAULT_FILE_CHUNK_SIZE, DEFAULT_STORE_PORT


def test_config_creates_default_file(tmp_path):
    """Test that config file is created with defaults if missing."""
    config_path = tmp_path / '.widerow' / 'config.json'
    config = Config(config_path)

    assert config_path.exists()
    assert config.get_host() == 'localhost'
    assert config.get_port() == DEFAULT_STORE_PORT
    assert config.data['file_chunk_size'] == DEFAULT_FILE_CHUNK_SIZE
    assert config.get_credentials() == (None, None)


def test_config_loads_existing_file(tmp_path):
    """Test loading existing config file merges over defaults."""
    config_path = tmp_path / '.widerow' / 'config.json'
    config_path.parent.mkdir(parents=True)
    with open(config_path, 'w') as f:
        json.dump({'host': 'store.example.com', 'port': 9999, 'username': 'admin'}, f)

    config = Config(config_path)

    assert config.get_host() == 'store.example.com'
    assert config.get_port() == 9999
    assert config.get_credentials() == ('admin', None)
    assert config.data['record_batch_size'] == 5


def test_config_handles_corrupted_file(tmp_path):
    """Test recovery from corrupted config file."""
    config_path = tmp_path / '.widerow' / 'config.json'
    config_path.parent.mkdir(parents=True)
    config_path.write_text('{ invalid json content')

    config = Config(config_path)

    assert config.get_host() == 'localhost'
    assert config_path.with_suffix('.json.bak').exists()


def test_set_keyspace_persists(temp_config):
    temp_config.set_keyspace('docs')

    assert temp_config.get_keyspace() == 'docs'
    with open(temp_config.config_path) as f:
        assert json.load(f)['keyspace'] == 'docs'


def test_to_connection_config(temp_config):
    temp_config.data.update({'keyspace': 'docs', 'file_chunk_size': 1024, 'record_batch_size': 10})

    connection_config = temp_config.to_connection_config()

    assert connection_config.keyspace == 'docs'
    assert connection_config.file_chunk_size == 1024
    assert connection_config.record_batch_size == 10


def test_to_connection_config_rejects_bad_values(temp_config):
    temp_config.data['record_batch_size'] = 1
    with pytest.raises(ValidationError):
        temp_config.to_connection_config()


def test_config_directory_created_if_missing(tmp_path):
    config_path = tmp_path / 'nested' / 'deep' / '.widerow' / 'config.json'
    Config(config_path)
    assert config_path.exists()
