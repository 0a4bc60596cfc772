from unittest.mock import MagicMock

import pytest
import requests

from map_resolver.config import MapStorageConfig
from map_resolver.services.map_storage import (
    HttpMapStorageClient,
    MapStorageClient,
    InMemoryMapStorageClient,
    MapStorageCreateError,
    MapStorageProbeError,
    build_wam_file,
    compute_wam_path,
    compute_wam_url,
)

CONFIG = MapStorageConfig(
    public_map_storage_url="http://map-storage.test/",
    map_storage_api_token="secret",
    play_url="http://play.test",
    request_timeout=3.0,
)


def _response(status_code=200, payload=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.reason = "OK" if response.ok else "Error"
    response.text = text
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


def _client(response=None, error=None):
    session = MagicMock()
    for method in (session.get, session.put):
        if error is not None:
            method.side_effect = error
        else:
            method.return_value = response
    return HttpMapStorageClient(CONFIG, session=session), session


def test_wam_path_and_url_are_deterministic():
    path = compute_wam_path("acme.example", "spaceco", "hq", "lobby")

    assert path == "acme.example/spaceco/hq/lobby/map.wam"
    assert compute_wam_url(path, "http://map-storage.test/") == "http://map-storage.test/acme.example/spaceco/hq/lobby/map.wam"
    assert compute_wam_url(path, "http://map-storage.test") == compute_wam_url(path, "http://map-storage.test/")


def test_client_compute_url_uses_its_config():
    client = InMemoryMapStorageClient(CONFIG)
    path = client.compute_path("acme.example", "u", "w", "r")

    assert client.compute_url(path) == "http://map-storage.test/acme.example/u/w/r/map.wam"


def test_config_requires_all_three_values():
    assert CONFIG.is_configured
    assert not MapStorageConfig(public_map_storage_url="http://x", map_storage_api_token="t").is_configured
    assert not MapStorageConfig(public_map_storage_url="", map_storage_api_token="t", play_url="p").is_configured


def test_build_wam_file_references_source_map_and_collections():
    wam = build_wam_file("https://cdn.example/lobby.tmj", "http://play.test/")

    assert wam["version"] == "1.0.0"
    assert wam["mapUrl"] == "https://cdn.example/lobby.tmj"
    assert wam["entityCollections"] == [
        {"url": "http://play.test/collections/FurnitureCollection.json", "type": "file"},
        {"url": "http://play.test/collections/OfficeCollection.json", "type": "file"},
    ]
    assert wam["entities"] == {} and wam["areas"] == [] and wam["metadata"] == {}


def test_exists_reads_maps_cache():
    client, session = _client(_response(payload={"version": "1", "maps": {"a/b/c/d/map.wam": {}}}))

    assert client.exists("a/b/c/d/map.wam") is True
    assert client.exists("a/b/c/e/map.wam") is False

    url = session.get.call_args.args[0]
    kwargs = session.get.call_args.kwargs
    assert url == "http://map-storage.test/maps"
    assert kwargs["headers"]["Authorization"] == "Bearer secret"
    assert kwargs["timeout"] == 3.0


@pytest.mark.parametrize("response", [
    _response(status_code=503),
    _response(payload=ValueError("not json")),
    _response(payload={"version": "1"}),
    _response(payload=["unexpected"]),
])
def test_exists_raises_when_probe_is_inconclusive(response):
    client, _ = _client(response)

    with pytest.raises(MapStorageProbeError):
        client.exists("a/b/c/d/map.wam")


def test_exists_raises_on_network_error():
    client, _ = _client(error=requests.Timeout("timed out"))

    with pytest.raises(MapStorageProbeError):
        client.exists("a/b/c/d/map.wam")


def test_create_puts_wam_document():
    client, session = _client(_response(status_code=201))

    client.create("a/b/c/d/map.wam", "https://cdn.example/lobby.tmj")

    url = session.put.call_args.args[0]
    kwargs = session.put.call_args.kwargs
    assert url == "http://map-storage.test/a/b/c/d/map.wam"
    assert kwargs["headers"]["Authorization"] == "Bearer secret"
    assert kwargs["json"]["mapUrl"] == "https://cdn.example/lobby.tmj"
    assert "data" not in kwargs


def test_create_raises_on_rejection():
    client, _ = _client(_response(status_code=500, text="boom"))

    with pytest.raises(MapStorageCreateError, match="boom"):
        client.create("a/b/c/d/map.wam", "https://cdn.example/lobby.tmj")


def test_create_raises_on_network_error():
    client, _ = _client(error=requests.ConnectionError("refused"))

    with pytest.raises(MapStorageCreateError):
        client.create("a/b/c/d/map.wam", "https://cdn.example/lobby.tmj")


def test_in_memory_client_records_calls_and_simulates_failures():
    storage = InMemoryMapStorageClient(CONFIG, existing={"x/map.wam"})

    assert storage.exists("x/map.wam")
    assert not storage.exists("y/map.wam")
    storage.create("y/map.wam", "https://cdn.example/y.tmj")
    assert storage.exists("y/map.wam")
    assert storage.files["y/map.wam"]["mapUrl"] == "https://cdn.example/y.tmj"
    assert storage.creates == [{"path": "y/map.wam", "map_url": "https://cdn.example/y.tmj"}]

    storage.fail_probe = True
    with pytest.raises(MapStorageProbeError):
        storage.exists("x/map.wam")

    storage.fail_create = True
    with pytest.raises(MapStorageCreateError):
        storage.create("z/map.wam", "https://cdn.example/z.tmj")
    assert "z/map.wam" not in storage.files


def test_storage_client_interface_is_abstract():
    with pytest.raises(TypeError):
        MapStorageClient(CONFIG)
