import json

import pytest

from marketplace.errors import ChainServiceError, VerificationError

LOCAL_CHAIN_ID = 31337
SEPOLIA_CHAIN_ID = 11155111

MARKETPLACE_ADDRESS_1 = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
MARKETPLACE_ADDRESS_2 = "0xe7f1725E7734CE288F8367e1Bb143E90bb3F0512"
BASIC_NFT_ADDRESS = "0x9fE46736679d2D9a65F0992F2272dE9f3c7fa6e0"


class FakeChainService:
    """Counts mined blocks; optionally fails on the n-th mine call (1-based)."""

    def __init__(self, fail_on=None, calls=None):
        self.fail_on = fail_on
        self.calls = calls if calls is not None else list()
        self.mined = 0

    def mine_one_block(self):
        if self.fail_on is not None and self.mined + 1 == self.fail_on:
            raise ChainServiceError("evm_mine rejected")
        self.mined += 1
        self.calls.append("mine")


class FakeVerificationService:
    def __init__(self, error=None):
        self.error = error
        self.requests = list()

    def verify_source(self, address, constructor_args):
        self.requests.append((address, constructor_args))
        if self.error is not None:
            raise self.error


class FakeAbiEntry:
    def __init__(self, data):
        self.data = data

    def model_dump(self, mode="python", by_alias=False):
        return dict(self.data)


class FakeContractType:
    def __init__(self, name, abi):
        self.name = name
        self.abi = [FakeAbiEntry(entry) for entry in abi]


class FakeContractInstance:
    def __init__(self, name, address, abi):
        self.address = address
        self.contract_type = FakeContractType(name, abi)


MARKETPLACE_ABI = [
    {"type": "function", "name": "listItem", "inputs": [], "outputs": []},
    {"type": "event", "name": "ItemListed", "inputs": [], "anonymous": False},
    {"type": "function", "name": "buyItem", "inputs": [], "outputs": []},
    {"type": "error", "name": "NftMarketplace__NotOwner", "inputs": []},
]

BASIC_NFT_ABI = [
    {"type": "function", "name": "mintNft", "inputs": [], "outputs": []},
    {"type": "constructor", "inputs": []},
]


@pytest.fixture
def registry_filepath(tmp_path):
    filepath = tmp_path / "constants" / "ContractAddresses.json"
    filepath.parent.mkdir()
    filepath.write_text("{}")
    return filepath


@pytest.fixture
def read_json():
    def _read(filepath):
        with open(filepath, "r") as file:
            return json.load(file)

    return _read


@pytest.fixture
def recorded_calls():
    return list()


@pytest.fixture
def fake_chain(recorded_calls):
    return FakeChainService(calls=recorded_calls)


@pytest.fixture
def recording_sleep(recorded_calls):
    def _sleep(seconds):
        recorded_calls.append(("sleep", seconds))

    return _sleep


@pytest.fixture
def verification_service():
    return FakeVerificationService()


@pytest.fixture
def failing_verification_service():
    return FakeVerificationService(error=VerificationError("Contract source code already verified"))


@pytest.fixture
def deployments():
    return {
        "NftMarketplace": FakeContractInstance(
            "NftMarketplace", MARKETPLACE_ADDRESS_1, MARKETPLACE_ABI
        ),
        "BasicNft": FakeContractInstance("BasicNft", BASIC_NFT_ADDRESS, BASIC_NFT_ABI),
    }
