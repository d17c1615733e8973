import zipfile

import pytest
from zipcli.config import CONFIG_ENV, ArchiverConfig, Compression

def test_archiver_config_parsing(tmp_path):
    config_content = """
    compression: stored
    chunk_size: 4096
    """
    config_path = tmp_path / "zipcli.yaml"
    config_path.write_text(config_content)

    config = ArchiverConfig.from_yaml(config_path)

    assert config.compression == Compression.STORED
    assert config.compression.zip_constant == zipfile.ZIP_STORED
    assert config.chunk_size == 4096
    assert config.compresslevel is None

def test_archiver_config_defaults():
    config = ArchiverConfig()
    assert config.compression == Compression.DEFLATED
    assert config.compression.zip_constant == zipfile.ZIP_DEFLATED
    assert config.chunk_size >= 1024

def test_empty_config_file_gives_defaults(tmp_path):
    config_path = tmp_path / "empty.yaml"
    config_path.write_text("")
    assert ArchiverConfig.from_yaml(config_path) == ArchiverConfig()

def test_config_chunk_size_too_small(tmp_path):
    config_path = tmp_path / "small.yaml"
    config_path.write_text("chunk_size: 512\n")

    with pytest.raises(ValueError): # Pydantic ValidationError
        ArchiverConfig.from_yaml(config_path)

def test_config_invalid_compression(tmp_path):
    config_path = tmp_path / "invalid.yaml"
    config_path.write_text("compression: zstd\n")

    with pytest.raises(ValueError):
        ArchiverConfig.from_yaml(config_path)

def test_config_malformed_yaml(tmp_path):
    config_path = tmp_path / "broken.yaml"
    config_path.write_text("compression: [stored\n")

    with pytest.raises(ValueError, match="Error parsing YAML config"):
        ArchiverConfig.from_yaml(config_path)

def test_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError, match="Config file not found"):
        ArchiverConfig.from_yaml(tmp_path / "nope.yaml")

def test_load_uses_environment(tmp_path, monkeypatch):
    config_path = tmp_path / "zipcli.yaml"
    config_path.write_text("compression: bzip2\n")

    monkeypatch.setenv(CONFIG_ENV, str(config_path))
    assert ArchiverConfig.load().compression == Compression.BZIP2

    monkeypatch.delenv(CONFIG_ENV)
    assert ArchiverConfig.load() == ArchiverConfig()

@pytest.mark.parametrize("content", [
    "compresslevel: 42\n",
    "compresslevel: -1\n",
    "compression: bzip2\ncompresslevel: 0\n",
])
def test_config_compresslevel_out_of_range(tmp_path, content):
    config_path = tmp_path / "level.yaml"
    config_path.write_text(content)

    with pytest.raises(ValueError):
        ArchiverConfig.from_yaml(config_path)

def test_config_compresslevel_in_range(tmp_path):
    config_path = tmp_path / "level.yaml"
    config_path.write_text("compression: deflated\ncompresslevel: 9\n")
    assert ArchiverConfig.from_yaml(config_path).compresslevel == 9
