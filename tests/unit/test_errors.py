"""
Error Taxonomy Unit Tests
Tests for core/schemas/errors.py
"""
import pytest

from core.schemas.errors import (
    CanonicalizationException,
    ConstructionException,
    ErrorCodes,
    IndexOutOfRangeException,
    InvalidRangeException,
    MalformedProofException,
    MerkleError,
    MerkleException,
)


class TestExceptionCodes:
    """Each exception carries its stable code."""

    @pytest.mark.parametrize(
        "exc,code",
        [
            (IndexOutOfRangeException("x"), ErrorCodes.INDEX_OUT_OF_RANGE),
            (InvalidRangeException("x"), ErrorCodes.INVALID_RANGE),
            (ConstructionException("x"), ErrorCodes.CONSTRUCTION_ERROR),
            (MalformedProofException("x"), ErrorCodes.MALFORMED_PROOF),
            (CanonicalizationException("x"), ErrorCodes.CANONICALIZATION_ERROR),
        ],
    )
    def test_code(self, exc, code):
        assert isinstance(exc, MerkleException)
        assert exc.code == code
        assert exc.retryable is False

    def test_builtin_bases(self):
        """Callers catching IndexError / ValueError still see engine errors."""
        assert isinstance(IndexOutOfRangeException("x"), IndexError)
        assert isinstance(InvalidRangeException("x"), ValueError)

    def test_index_details(self):
        exc = IndexOutOfRangeException("bad index", index=4, size=3)
        assert exc.details == {"index": 4, "size": 3}
        assert str(exc) == "bad index"

    def test_range_details(self):
        exc = InvalidRangeException("bad range", start_index=3, end_index=1)
        assert exc.details == {"start_index": 3, "end_index": 1}

    def test_malformed_field_path(self):
        exc = MalformedProofException("bad", field_path="directions")
        assert exc.details == {"field_path": "directions"}

    def test_repr(self):
        assert repr(ConstructionException("empty")) == (
            "ConstructionException(code='CONSTRUCTION_ERROR', message='empty')"
        )


class TestErrorModel:
    """Conversion of exceptions to the MerkleError model."""

    def test_to_error_model(self):
        model = IndexOutOfRangeException("bad index", index=9, size=2).to_error_model()

        assert model.code == ErrorCodes.INDEX_OUT_OF_RANGE
        assert model.details == {"index": 9, "size": 2}
        assert model.model_dump()["retryable"] is False

    def test_model_forbids_extra_fields(self):
        with pytest.raises(Exception):
            MerkleError(code="X", message="m", unexpected=True)
