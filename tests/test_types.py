import pytest

from nexelra import types
from nexelra.bech32 import module_address, sample_acc_address
from nexelra.errors import InvalidAddressError, InvalidRequestError


def test_identity_key_appends_slash():
    assert types.identity_key("0") == b"0/"


def test_key_prefix():
    assert types.key_prefix(types.IDENTITY_KEY_PREFIX) == b"Identity/value/"


def test_hash_cccd_id_of_empty_string():
    assert types.hash_cccd_id("") == (
        "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
    )


def test_hash_cccd_id_is_deterministic_hex():
    digest = types.hash_cccd_id("123456789")
    assert digest == types.hash_cccd_id("123456789")
    assert len(digest) == 64
    assert digest != types.hash_cccd_id("123456780")


@pytest.mark.parametrize(
    "gen_state, valid",
    [
        (types.default_genesis(), True),
        (
            types.GenesisState(
                identity_list=[types.Identity(address="0"), types.Identity(address="1")]
            ),
            True,
        ),
        (
            types.GenesisState(
                identity_list=[types.Identity(address="0"), types.Identity(address="0")]
            ),
            False,
        ),
    ],
    ids=["default is valid", "valid genesis state", "duplicated identity"],
)
def test_genesis_state_validate(gen_state, valid):
    if valid:
        assert gen_state.validate() is None
    else:
        with pytest.raises(ValueError, match="duplicated index for identity"):
            gen_state.validate()


def test_default_genesis_is_empty():
    genesis = types.default_genesis()
    assert genesis.identity_list == []
    assert genesis.params == types.default_params()


def test_genesis_dict_round_trip():
    genesis = types.GenesisState(
        identity_list=[
            types.Identity(address="a", id_hash="sample_hash_1", created_at=1640995200),
            types.Identity(address="b", id_hash="sample_hash_2", created_at=1640995300),
        ]
    )
    assert types.GenesisState.from_dict(genesis.to_dict()) == genesis


def test_identity_dict_uses_string_timestamp():
    data = types.Identity(address="a", id_hash="h", created_at=1640995200).to_dict()
    assert data["created_at"] == "1640995200"
    assert types.Identity.from_dict(data).created_at == 1640995200


def test_msg_create_identity_invalid_address():
    msg = types.MsgCreateIdentity(creator="invalid_address")
    with pytest.raises(InvalidAddressError):
        msg.validate_basic()


def test_msg_create_identity_valid_address():
    msg = types.MsgCreateIdentity(creator=sample_acc_address(), cccd_id="123456789")
    assert msg.validate_basic() is None


def test_msg_create_identity_empty_cccd():
    msg = types.MsgCreateIdentity(creator=sample_acc_address())
    with pytest.raises(InvalidRequestError, match="CCCD ID cannot be empty"):
        msg.validate_basic()


def test_msg_update_params_invalid_authority():
    msg = types.MsgUpdateParams(authority="invalid", params=types.default_params())
    with pytest.raises(InvalidAddressError, match="invalid authority address"):
        msg.validate_basic()


def test_msg_update_params_valid():
    msg = types.MsgUpdateParams(authority=module_address("gov"))
    assert msg.validate_basic() is None


def test_msg_types_registry_builds_create_identity():
    msg_cls = types.MSG_TYPES["identity/CreateIdentity"]
    msg = msg_cls(creator="invalid_address", cccd_id="123456789")
    with pytest.raises(InvalidAddressError):
        msg.validate_basic()
    valid = msg_cls(creator=sample_acc_address(), cccd_id="123456789")
    assert valid.validate_basic() is None


def test_msg_types_registry_builds_update_params():
    msg_cls = types.MSG_TYPES["identity/UpdateParams"]
    msg = msg_cls(authority="invalid", params=types.default_params())
    with pytest.raises(InvalidAddressError, match="invalid authority address"):
        msg.validate_basic()