import pytest
from azure.core.exceptions import AzureError

from multistorage_azure_blob.exceptions import InvalidLocatorException, TransportException
from multistorage_azure_blob.utils.error_handler import convert_exceptions, log_exceptions


@convert_exceptions({AzureError: TransportException})
async def failing(exception):
    raise exception


@convert_exceptions({AzureError: TransportException})
def failing_sync(exception):
    raise exception


async def test_converts_mapped_exceptions():
    error = AzureError("socket closed")

    with pytest.raises(TransportException, match="socket closed") as excinfo:
        await failing(error)

    assert excinfo.value.__cause__ is error
    assert excinfo.value.error_code == "TRANSPORT_ERROR"
    assert excinfo.value.details == {"original_exception": "AzureError"}


async def test_adapter_exceptions_pass_through():
    error = InvalidLocatorException("Invalid URL x")

    with pytest.raises(InvalidLocatorException) as excinfo:
        await failing(error)

    assert excinfo.value is error


def test_unmapped_exceptions_pass_through():
    with pytest.raises(KeyError):
        failing_sync(KeyError("k"))

    with pytest.raises(TransportException):
        failing_sync(AzureError("boom"))


async def test_log_exceptions_reraises():
    @log_exceptions(log_level="WARNING", include_traceback=False)
    async def broken():
        raise RuntimeError("broken")

    with pytest.raises(RuntimeError, match="broken"):
        await broken()
