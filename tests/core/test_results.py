"""Tests for typed results and error translation."""

import pytest
from cassandra import InvalidRequest, OperationTimedOut, ReadTimeout, Unavailable
from cassandra.cluster import NoHostAvailable

from mflix_store.core.errors import (
    DataAccessError,
    DuplicateKeyError,
    MalformedIdentifierError,
    PersistenceError,
    StorageUnavailableError,
    translate_driver_error,
)
from mflix_store.core.identifiers import (
    from_storage_id,
    normalize_email,
    to_storage_id,
)
from mflix_store.core.results import DeleteAcknowledgement, Err, Ok, WriteOutcome


class TestResults:
    def test_ok_unwraps_value(self):
        result = Ok(WriteOutcome.UPDATED)

        assert result.is_ok
        assert result.unwrap() is WriteOutcome.UPDATED

    def test_err_unwrap_raises_carried_error(self):
        error = DuplicateKeyError(key="abc")
        result = Err(error)

        assert not result.is_ok
        with pytest.raises(DuplicateKeyError) as exc_info:
            result.unwrap()
        assert exc_info.value is error

    def test_outcomes_compare_as_strings(self):
        assert WriteOutcome.DENIED == "denied"

    def test_delete_acknowledgement_defaults(self):
        assert DeleteAcknowledgement(acknowledged=False).deleted_count == 0


class TestErrorHierarchy:
    def test_persistence_errors_are_data_access_errors(self):
        for error in (
            DuplicateKeyError(),
            MalformedIdentifierError("x"),
            StorageUnavailableError(),
        ):
            assert isinstance(error, PersistenceError)
            assert isinstance(error, DataAccessError)

    def test_only_unavailability_is_retryable(self):
        assert StorageUnavailableError().retryable is True
        assert DuplicateKeyError().retryable is False


class TestTranslateDriverError:
    @pytest.mark.parametrize(
        "error",
        [
            Unavailable("not enough replicas"),
            ReadTimeout("read timed out"),
            OperationTimedOut("client timeout"),
            NoHostAvailable("no hosts", {}),
        ],
    )
    def test_transient_errors(self, error):
        translated = translate_driver_error(error)

        assert isinstance(translated, StorageUnavailableError)
        assert translated.code == "storage_unavailable"

    def test_other_errors(self):
        translated = translate_driver_error(InvalidRequest("unknown column"))

        assert type(translated) is PersistenceError
        assert "InvalidRequest" in translated.message


class TestIdentifiers:
    def test_round_trip(self):
        public_id = "3f2504e0-4f89-11d3-9a0c-0305e82c3301"

        assert from_storage_id(to_storage_id(public_id)) == public_id

    @pytest.mark.parametrize("value", ["", "not-a-uuid", "5a9427648b0beebeb69579e7"])
    def test_malformed(self, value):
        with pytest.raises(MalformedIdentifierError) as exc_info:
            to_storage_id(value)
        assert exc_info.value.value == value

    def test_normalize_email(self):
        assert normalize_email(" Ann@Example.COM ") == "ann@example.com"
