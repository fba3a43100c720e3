import base64
import os

import pytest

from docanalyzer.ingestion.encoding import (
    GENERIC_MIME_TYPE,
    decode,
    decoded_size,
    encode,
    resolve_mime_type,
)
from docanalyzer.ingestion.exceptions import EncodingError


class TestRoundTrip:
    @pytest.mark.parametrize("size", [0, 1, 2, 3, 4])
    def test_small_buffers(self, size: int) -> None:
        content = os.urandom(size)
        encoded = encode(content, "text/plain")
        assert decode(encoded.data) == content
        assert encoded.size == size

    def test_large_buffer_spanning_many_chunks(self) -> None:
        content = os.urandom(10 * 1024 * 1024 + 7)
        encoded = encode(content, "application/pdf")
        assert decode(encoded.data) == content

    def test_matches_single_shot_base64(self) -> None:
        content = os.urandom(3 * 1024 * 1024 + 1)
        encoded = encode(content, "application/pdf")
        assert encoded.data == base64.b64encode(content).decode("ascii")

    def test_is_deterministic(self) -> None:
        content = b"same bytes"
        assert encode(content, "text/plain") == encode(content, "text/plain")


class TestResolveMimeType:
    def test_declared_mime_wins(self) -> None:
        assert resolve_mime_type("a.txt", "application/pdf") == "application/pdf"

    @pytest.mark.parametrize(
        ("filename", "expected"),
        [
            ("a.pdf", "application/pdf"),
            (
                "a.DOCX",
                "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
            ),
            ("a.doc", "application/msword"),
            ("a.txt", "text/plain"),
            ("a.csv", "text/csv"),
        ],
    )
    def test_resolves_from_extension_when_declared_empty(
        self, filename: str, expected: str
    ) -> None:
        assert resolve_mime_type(filename, "") == expected

    def test_generic_declared_mime_resolves_from_extension(self) -> None:
        assert resolve_mime_type("a.pdf", GENERIC_MIME_TYPE) == "application/pdf"

    def test_unknown_extension_maps_to_generic(self) -> None:
        assert resolve_mime_type("a.xyz", "") == GENERIC_MIME_TYPE

    def test_encode_carries_resolved_mime(self) -> None:
        assert encode(b"x", "", "notes.csv").mime_type == "text/csv"


class TestDecode:
    def test_invalid_payload_raises(self) -> None:
        with pytest.raises(EncodingError, match="Invalid base64"):
            decode("not base64!")


class TestDecodedSize:
    @pytest.mark.parametrize("size", [0, 1, 2, 3, 100])
    def test_matches_real_length(self, size: int) -> None:
        assert decoded_size(encode(b"a" * size, "").data) == size
