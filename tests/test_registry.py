import json

import pytest

from marketplace.errors import InvalidArgument, StorageError
from marketplace.registry import (
    RegistryStore,
    create_registry,
    get_addresses,
    latest_address,
    read_registry,
    upsert,
    write_registry,
)
from tests.conftest import (
    LOCAL_CHAIN_ID,
    MARKETPLACE_ADDRESS_1,
    MARKETPLACE_ADDRESS_2,
    SEPOLIA_CHAIN_ID,
)


def test_upsert_into_empty_registry():
    registry = upsert({}, LOCAL_CHAIN_ID, "NftMarketplace", "0xAA")
    assert registry == {"31337": {"NftMarketplace": ["0xAA"]}}


def test_upsert_existing_latest_address_is_unchanged():
    registry = {"31337": {"NftMarketplace": ["0xAA"]}}
    assert upsert(registry, LOCAL_CHAIN_ID, "NftMarketplace", "0xAA") == registry


def test_upsert_is_idempotent():
    once = upsert({}, LOCAL_CHAIN_ID, "NftMarketplace", "0xAA")
    twice = upsert(once, LOCAL_CHAIN_ID, "NftMarketplace", "0xAA")
    assert once == twice


def test_upsert_does_not_mutate_input():
    registry = {"31337": {"NftMarketplace": ["0xAA"]}}
    upsert(registry, LOCAL_CHAIN_ID, "NftMarketplace", "0xBB")
    assert registry == {"31337": {"NftMarketplace": ["0xAA"]}}


def test_upsert_adds_contract_under_existing_chain():
    registry = {"31337": {"NftMarketplace": ["0xAA"]}}
    updated = upsert(registry, LOCAL_CHAIN_ID, "BasicNft", "0xCC")
    assert updated == {"31337": {"NftMarketplace": ["0xAA"], "BasicNft": ["0xCC"]}}


def test_redeployments_are_appended_in_order():
    registry = {}
    for address in ("0xAA", "0xBB", "0xCC"):
        registry = upsert(registry, LOCAL_CHAIN_ID, "NftMarketplace", address)
    assert get_addresses(registry, LOCAL_CHAIN_ID, "NftMarketplace") == ["0xAA", "0xBB", "0xCC"]
    assert latest_address(registry, LOCAL_CHAIN_ID, "NftMarketplace") == "0xCC"


def test_previously_recorded_address_is_not_duplicated():
    registry = {}
    for address in ("0xAA", "0xBB", "0xAA"):
        registry = upsert(registry, LOCAL_CHAIN_ID, "NftMarketplace", address)
    assert get_addresses(registry, LOCAL_CHAIN_ID, "NftMarketplace") == ["0xAA", "0xBB"]


def test_upsert_isolates_chains():
    registry = {
        "11155111": {"NftMarketplace": ["0x11"], "BasicNft": ["0x22"]},
        "31337": {"NftMarketplace": ["0xAA"]},
    }
    updated = upsert(registry, LOCAL_CHAIN_ID, "NftMarketplace", "0xBB")
    assert updated["11155111"] == registry["11155111"]
    assert updated["31337"] == {"NftMarketplace": ["0xAA", "0xBB"]}


def test_lookups_on_missing_entries():
    assert get_addresses({}, SEPOLIA_CHAIN_ID, "NftMarketplace") == []
    assert latest_address({"31337": {}}, LOCAL_CHAIN_ID, "NftMarketplace") is None


@pytest.mark.parametrize(
    "chain_id, contract_name, address",
    [
        (-1, "NftMarketplace", "0xAA"),
        ("31337", "NftMarketplace", "0xAA"),
        (True, "NftMarketplace", "0xAA"),
        (31337, "", "0xAA"),
        (31337, "NftMarketplace", ""),
        (31337, "NftMarketplace", None),
    ],
)
def test_upsert_rejects_invalid_arguments(chain_id, contract_name, address):
    with pytest.raises(InvalidArgument):
        upsert({}, chain_id, contract_name, address)


def test_read_missing_registry(tmp_path):
    with pytest.raises(StorageError) as error:
        read_registry(tmp_path / "ContractAddresses.json")
    assert error.value.filepath == tmp_path / "ContractAddresses.json"


@pytest.mark.parametrize(
    "content",
    [
        b"not json",
        b"[]",
        b'{"31337": ["0xAA"]}',
        b'{"31337": {"NftMarketplace": "0xAA"}}',
        b'{"31337": {"NftMarketplace": [1]}}',
        b"\xff{}",
    ],
)
def test_read_malformed_registry(registry_filepath, content):
    registry_filepath.write_bytes(content)
    with pytest.raises(StorageError):
        read_registry(registry_filepath)


def test_round_trip_preserves_unknown_entries(registry_filepath):
    data = {
        "5": {"LegacyMarketplace": ["0x01", "0x02"]},
        "31337": {"NftMarketplace": ["0xAA"], "SomethingElse": []},
        "localnet": {"NftMarketplace": ["0x03"]},
    }
    registry_filepath.write_text(json.dumps(data))

    write_registry(read_registry(registry_filepath), registry_filepath)

    assert read_registry(registry_filepath) == data
    assert list(read_registry(registry_filepath)) == ["5", "31337", "localnet"]


def test_write_leaves_no_temp_file(registry_filepath):
    write_registry({"31337": {"NftMarketplace": ["0xAA"]}}, registry_filepath)
    assert sorted(p.name for p in registry_filepath.parent.iterdir()) == [
        "ContractAddresses.json"
    ]


def test_write_failure_raises_storage_error(tmp_path):
    filepath = tmp_path / "missing-dir" / "ContractAddresses.json"
    with pytest.raises(StorageError):
        write_registry({}, filepath)
    assert not filepath.parent.exists()


def test_create_registry(tmp_path, read_json):
    filepath = create_registry(tmp_path / "constants" / "ContractAddresses.json")
    assert read_json(filepath) == {}
    with pytest.raises(FileExistsError):
        create_registry(filepath)


def test_store_update(registry_filepath, read_json):
    store = RegistryStore(registry_filepath)

    assert store.update(LOCAL_CHAIN_ID, "NftMarketplace", MARKETPLACE_ADDRESS_1)
    assert store.update(LOCAL_CHAIN_ID, "NftMarketplace", MARKETPLACE_ADDRESS_2)
    assert read_json(registry_filepath) == {
        "31337": {"NftMarketplace": [MARKETPLACE_ADDRESS_1, MARKETPLACE_ADDRESS_2]}
    }


def test_store_redundant_update_does_not_write(registry_filepath):
    store = RegistryStore(registry_filepath)
    store.update(LOCAL_CHAIN_ID, "NftMarketplace", MARKETPLACE_ADDRESS_1)
    registry_filepath.write_text(registry_filepath.read_text() + "\n")  # marker
    content = registry_filepath.read_text()

    assert not store.update(LOCAL_CHAIN_ID, "NftMarketplace", MARKETPLACE_ADDRESS_1)
    assert registry_filepath.read_text() == content


def test_store_update_validates_before_reading(tmp_path):
    store = RegistryStore(tmp_path / "missing.json")
    with pytest.raises(InvalidArgument):
        store.update(-5, "NftMarketplace", MARKETPLACE_ADDRESS_1)


def test_store_requires_existing_registry(tmp_path):
    store = RegistryStore(tmp_path / "missing.json")
    with pytest.raises(StorageError):
        store.update(LOCAL_CHAIN_ID, "NftMarketplace", MARKETPLACE_ADDRESS_1)
    assert not (tmp_path / "missing.json").exists()


def test_store_rejects_undecodable_registry(registry_filepath):
    registry_filepath.write_bytes(b"\xff{}")
    store = RegistryStore(registry_filepath)
    with pytest.raises(StorageError) as error:
        store.update(LOCAL_CHAIN_ID, "NftMarketplace", "0xAA")
    assert error.value.filepath == registry_filepath
    assert registry_filepath.read_bytes() == b"\xff{}"


def test_write_syncs_before_rename(registry_filepath, monkeypatch, read_json):
    synced = list()

    def _fsync(fd):
        # the target must still hold the previous content when the temp file is synced
        synced.append(read_json(registry_filepath))

    monkeypatch.setattr("marketplace.utils.os.fsync", _fsync)
    write_registry({"31337": {"NftMarketplace": ["0xAA"]}}, registry_filepath)

    assert synced == [{}]
    assert read_json(registry_filepath) == {"31337": {"NftMarketplace": ["0xAA"]}}
