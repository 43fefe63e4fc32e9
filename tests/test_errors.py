import pytest

from nexelra import errors


def test_invalid_signer_code_and_message():
    err = errors.InvalidSignerError()
    assert err.code == 1100
    assert err.codespace == "identity"
    assert str(err) == "expected gov account as only signer for proposal message"


def test_wrapped_message_puts_detail_first():
    err = errors.InvalidRequestError("address already has an identity")
    assert str(err) == "address already has an identity: invalid request"


def test_address_error_detail():
    err = errors.InvalidAddressError("invalid creator address (x)")
    assert str(err).startswith("invalid creator address (x): ")
    assert err.detail == "invalid creator address (x)"


def test_status_error_defaults():
    assert errors.NotFoundError().detail == "not found"
    assert errors.InvalidArgumentError().detail == "invalid request"


def test_status_error_format():
    assert str(errors.NotFoundError()) == "rpc error: code = NotFound desc = not found"


def test_internal_error_carries_detail():
    err = errors.InternalError("boom")
    assert err.detail == "boom"
    assert "boom" in str(err)


@pytest.mark.parametrize(
    "cls",
    [
        errors.InvalidSignerError,
        errors.InvalidAddressError,
        errors.InvalidRequestError,
        errors.NotFoundError,
        errors.InvalidArgumentError,
        errors.InternalError,
    ],
)
def test_all_errors_caught_by_base(cls):
    err = cls("detail")
    with pytest.raises(errors.IdentityError) as excinfo:
        raise err
    assert excinfo.value is err
    assert "detail" in str(excinfo.value)