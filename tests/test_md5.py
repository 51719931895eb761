import hashlib

import pytest

from pdf_encrypt_lite import md5


@pytest.mark.parametrize(
    ("message", "expected"),
    [
        (b"", "d41d8cd98f00b204e9800998ecf8427e"),
        (b"a", "0cc175b9c0f1b6a831c399e269772661"),
        (b"abc", "900150983cd24fb0d6963f7d28e17f72"),
        (b"message digest", "f96b697d7cb7938d525a2f31aaf161d0"),
        (b"abcdefghijklmnopqrstuvwxyz", "c3fcd3d76192e4007dfb496cca67e13b"),
        (
            b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789",
            "d174ab98d277d9f5a5611c2c9f419d9f",
        ),
        (b"1234567890" * 8, "57edf4a22be3c955ac49da2e2107b67a"),
    ],
)
def test_md5_rfc1321_vectors(message, expected):
    assert md5(message).hex() == expected


@pytest.mark.parametrize("length", [55, 56, 57, 63, 64, 65, 119, 120, 128, 1000])
def test_md5_padding_boundaries(length):
    message = bytes(i % 251 for i in range(length))
    assert md5(message) == hashlib.md5(message).digest()


def test_md5_accepts_str():
    assert md5("abc") == md5(b"abc")
    assert md5("é") == hashlib.md5("é".encode("utf-8")).digest()


def test_md5_output_length():
    for message in (b"", b"x" * 17, bytes(300)):
        assert len(md5(message)) == 16


def test_md5_accepts_bytearray():
    assert md5(bytearray(b"abc")) == md5(b"abc")
