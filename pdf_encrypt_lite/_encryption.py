import struct
from enum import Enum
from typing import Optional, Union

from pypdf.generic import (
    ByteStringObject,
    DictionaryObject,
    NameObject,
    NumberObject,
    PdfObject,
)

from pdf_encrypt_lite._crypt_providers import CryptRC4, md5, rc4_encrypt

from ._text_utils import b_
from ._utils import logger_warning
from .constants import SKIPPED_STREAM_KEYS, Core
from .constants import EncryptionDictAttributes as ED
from .generic import ValueKind, classify, string_bytes

_PADDING = b"(\xbfN^Nu\x8aAd\x00NV\xff\xfa\x01\x08..\x00\xb6\xd0h>\x80/\x0c\xa9\xfedSiz"


def pad_password(password: Union[str, bytes]) -> bytes:
    """
    Pad or truncate the password string to exactly 32 bytes.

    If the password string is more than 32 bytes long, use only its first
    32 bytes; if it is less than 32 bytes long, pad it by appending the
    required number of additional bytes from the beginning of the padding
    string. An empty password yields the padding string itself.
    Strings are encoded as UTF-8; pypdf and Acrobat use latin-1 or
    PDFDocEncoding for revision 3, so non-ASCII passwords may not open there.
    """
    return (b_(password) + _PADDING)[:32]


def _xor_key(key: bytes, index: int) -> bytes:
    return bytes(b ^ index for b in key)


def _unsigned_p(P: int) -> int:
    return P % 4294967296


def _signed_p(P: int) -> int:
    P = _unsigned_p(P)
    return P - 4294967296 if P >= 2147483648 else P


class AlgV4:
    """Key derivation of the standard security handler, revision 3."""

    @staticmethod
    def compute_key(
        password: Union[str, bytes],
        o_entry: bytes,
        P: int,
        id1_entry: bytes,
        key_size: int = 16,
    ) -> bytes:
        """
        Algorithm 2: Computing an encryption key.

        a) Pad or truncate the password string to exactly 32 bytes.
        b) Initialize the MD5 hash function and pass the result of step (a)
           as input to this function.
        c) Pass the value of the encryption dictionary's O entry to the
           MD5 hash function.
        d) Convert the integer value of the P entry to a 32-bit unsigned binary
           number and pass these bytes to the MD5 hash function, low-order
           byte first.
        e) Pass the first element of the file's file identifier array to the
           MD5 hash function.
        f) Finish the hash.
        g) Do the following 50 times: Take the output from the previous
           MD5 hash and pass the first n bytes of the output as input into a
           new MD5 hash, where n is the number of bytes of the encryption key.
        h) Set the encryption key to the first n bytes of the output from the
           final MD5 hash.

        Args:
            password: The user password
            o_entry: The owner entry
            P: A set of flags specifying which operations shall be permitted
                when the document is opened with user access. Signed and
                unsigned representations of the same bits are equivalent.
            id1_entry: The first element of the trailer's /ID array
            key_size: The size of the key in bytes

        Returns:
            The file encryption key
        """
        md5_hash = md5(
            pad_password(password)
            + o_entry
            + struct.pack("<I", _unsigned_p(P))
            + id1_entry
        )
        for _ in range(50):
            md5_hash = md5(md5_hash[:key_size])
        return md5_hash[:key_size]

    @staticmethod
    def compute_O_value_key(owner_password: Union[str, bytes], key_size: int = 16) -> bytes:
        """
        Algorithm 3: Computing the encryption dictionary's O (owner password) value.

        a) Pad or truncate the owner password string as described in step (a)
           of "Algorithm 2: Computing an encryption key".
        b) Initialize the MD5 hash function and pass the result of step (a) as
           input to this function.
        c) Do the following 50 times: Take the output from the previous
           MD5 hash and pass it as input into a new MD5 hash.
        d) Create an RC4 encryption key using the first n bytes of the output
           from the final MD5 hash.

        Steps (e) to (h) are in :meth:`compute_O_value`.

        Args:
            owner_password: The owner password, already resolved to the user
                password when no owner password is set
            key_size: The size of the key in bytes

        Returns:
            The RC4 key
        """
        md5_hash = md5(pad_password(owner_password))
        for _ in range(50):
            md5_hash = md5(md5_hash)
        return md5_hash[:key_size]

    @staticmethod
    def compute_O_value(rc4_key: bytes, user_password: Union[str, bytes]) -> bytes:
        """
        See :func:`compute_O_value_key`.

        e) Pad or truncate the user password string as described in step (a) of
           "Algorithm 2: Computing an encryption key".
        f) Encrypt the result of step (e), using an RC4 encryption function with
           the encryption key obtained in step (d).
        g) Do the following 19 times: Take the output from the previous
           invocation of the RC4 function and pass it as input to a new
           invocation of the function; use an encryption key generated by
           taking each byte of the encryption key obtained in step (d) and
           performing an XOR operation between that byte and the single-byte
           value of the iteration counter (from 1 to 19).
        h) Store the output from the final invocation of the RC4 function as
           the value of the O entry in the encryption dictionary.

        Args:
            rc4_key: The key from :meth:`compute_O_value_key`
            user_password: The user password

        Returns:
            The 32 byte O value
        """
        o_value = pad_password(user_password)
        for i in range(20):
            o_value = rc4_encrypt(_xor_key(rc4_key, i), o_value)
        return o_value

    @staticmethod
    def compute_U_value(key: bytes, id1_entry: bytes) -> bytes:
        """
        Algorithm 5: Computing the encryption dictionary's U (user password) value.

        a) Create an encryption key based on the user password string, as
           described in "Algorithm 2: Computing an encryption key".
        b) Initialize the MD5 hash function and pass the 32-byte padding
           string as input to this function.
        c) Pass the first element of the file's file identifier array to the
           hash function and finish the hash.
        d) Encrypt the 16-byte result of the hash, using an RC4 encryption
           function with the encryption key from step (a).
        e) Do the following 19 times: Take the output from the previous
           invocation of the RC4 function and pass it as input to a new
           invocation of the function; use an encryption key generated by
           taking each byte of the original encryption key obtained in
           step (a) and performing an XOR operation between that byte and
           the single-byte value of the iteration counter (from 1 to 19).
        f) Append 16 bytes of arbitrary padding to the output from the final
           invocation of the RC4 function and store the 32-byte result as the
           value of the U entry in the encryption dictionary.

        Args:
            key: The file encryption key
            id1_entry: The first element of the trailer's /ID array

        Returns:
            The 32 byte U value; the arbitrary padding is 16 zero bytes
        """
        u_value = md5(_PADDING + id1_entry)
        for i in range(20):
            u_value = rc4_encrypt(_xor_key(key, i), u_value)
        return u_value + bytes(16)


def derive_file_key(
    user_password: Union[str, bytes], o_entry: bytes, P: int, id1_entry: bytes
) -> bytes:
    return AlgV4.compute_key(user_password, o_entry, P, id1_entry)


def derive_owner_value(
    owner_password: Optional[Union[str, bytes]], user_password: Union[str, bytes]
) -> bytes:
    """Compute the O entry; an empty or missing owner password means the user password."""
    rc4_key = AlgV4.compute_O_value_key(owner_password or user_password)
    return AlgV4.compute_O_value(rc4_key, user_password)


def derive_user_value(key: bytes, id1_entry: bytes) -> bytes:
    return AlgV4.compute_U_value(key, id1_entry)


def compute_object_key(key: bytes, idnum: int, generation: int = 0) -> bytes:
    """
    Algorithm 1: Encryption of data using the RC4 algorithm, steps (a) to (d).

    a) Obtain the object number and generation number from the object
       identifier of the string or stream to be encrypted. If the string is a
       direct object, use the identifier of the indirect object containing it.
    b) Treating the object number and generation number as binary integers,
       extend the original n-byte encryption key to n + 5 bytes by appending
       the low-order 3 bytes of the object number and the low-order 2 bytes of
       the generation number in that order, low-order byte first.
    c) Initialize the MD5 hash function and pass the result of step (b) as
       input to this function.
    d) Use the first (n + 5) bytes, up to a maximum of 16, of the output
       from the MD5 hash as the key for the RC4 symmetric key algorithm.
    """
    pack1 = (idnum & 0xFFFFFF).to_bytes(3, "little")
    pack2 = (generation & 0xFFFF).to_bytes(2, "little")
    n = len(key)
    return md5(key + pack1 + pack2)[: min(n + 5, 16)]


def encrypt_payload(data: bytes, key: bytes, idnum: int, generation: int = 0) -> bytes:
    return CryptRC4(compute_object_key(key, idnum, generation)).process(data)


def _is_encryption_dict(obj: PdfObject) -> bool:
    return (
        classify(obj) is ValueKind.DICTIONARY
        and obj.get(ED.FILTER) == Core.STANDARD  # type: ignore[attr-defined]
    )


class CryptFilter:
    """
    Encrypts the strings and streams of one indirect object.

    Every string and every stream gets its own RC4 instance, all keyed with
    the same per-object key.
    """

    def __init__(self, key: bytes, idnum: int, generation: int) -> None:
        self.object_key = compute_object_key(key, idnum, generation)

    def encrypt(self, data: bytes) -> bytes:
        return CryptRC4(self.object_key).process(data)

    def encrypt_object(self, obj: PdfObject) -> PdfObject:
        """
        Encrypt ``obj`` in place.

        Strings cannot be changed in place; the encrypted replacement is
        returned and dictionaries and arrays store it in the slot the
        original came from.
        """
        kind = classify(obj)
        if kind is ValueKind.STRING:
            return ByteStringObject(self.encrypt(string_bytes(obj)))
        if kind is ValueKind.STREAM:
            obj._data = self.encrypt(obj._data)  # type: ignore[attr-defined]
            self._encrypt_dictionary(obj)  # type: ignore[arg-type]
        elif kind is ValueKind.DICTIONARY:
            self._encrypt_dictionary(obj)  # type: ignore[arg-type]
        elif kind is ValueKind.ARRAY:
            for i, value in enumerate(obj):  # type: ignore[arg-type]
                obj[i] = self.encrypt_object(value)  # type: ignore[index]
        return obj

    def _encrypt_dictionary(self, obj: DictionaryObject) -> None:
        for key, value in list(obj.items()):
            if key in SKIPPED_STREAM_KEYS:
                continue
            obj[key] = self.encrypt_object(value)


class EncryptAlgorithm(tuple, Enum):
    # V, R, Length
    RC4_128 = (2, 3, 128)


class Encryption:
    """
    Collects the parameters of the standard security handler and applies
    them to document objects.

    Args:
        o_value: The 32 byte O entry
        u_value: The 32 byte U entry
        key: The file encryption key
        P: A set of flags specifying which operations shall be permitted
           when the document is opened with user access
        first_id_entry: The first element of the file's /ID array
    """

    def __init__(
        self,
        o_value: bytes,
        u_value: bytes,
        key: bytes,
        P: int,
        first_id_entry: bytes,
        algorithm: EncryptAlgorithm = EncryptAlgorithm.RC4_128,
    ) -> None:
        self.V, self.R, self.Length = algorithm
        self.P = _unsigned_p(P)
        self.O = o_value
        self.U = u_value
        self.id1_entry = first_id_entry
        self._key = key

    @classmethod
    def make(
        cls,
        user_password: Union[str, bytes],
        owner_password: Optional[Union[str, bytes]],
        P: int,
        first_id_entry: bytes,
    ) -> "Encryption":
        o_value = derive_owner_value(owner_password, user_password)
        key = AlgV4.compute_key(user_password, o_value, P, first_id_entry)
        u_value = AlgV4.compute_U_value(key, first_id_entry)
        return cls(o_value, u_value, key, P, first_id_entry)

    @property
    def key(self) -> bytes:
        return self._key

    def _make_crypt_filter(self, idnum: int, generation: int) -> CryptFilter:
        return CryptFilter(self._key, idnum, generation)

    def encrypt_object(self, obj: PdfObject, idnum: int, generation: int = 0) -> PdfObject:
        if _is_encryption_dict(obj):
            logger_warning(
                f"Object {idnum} {generation} is a /Standard encryption "
                "dictionary and is left unencrypted",
                __name__,
            )
            return obj
        return self._make_crypt_filter(idnum, generation).encrypt_object(obj)

    def write_entry(self) -> DictionaryObject:
        """Build the /Encrypt dictionary for the document trailer."""
        entry = DictionaryObject()
        entry[NameObject(ED.FILTER)] = NameObject(Core.STANDARD)
        entry[NameObject(ED.V)] = NumberObject(self.V)
        entry[NameObject(ED.R)] = NumberObject(self.R)
        entry[NameObject(ED.LENGTH)] = NumberObject(self.Length)
        entry[NameObject(ED.P)] = NumberObject(_signed_p(self.P))
        entry[NameObject(ED.O)] = ByteStringObject(self.O)
        entry[NameObject(ED.U)] = ByteStringObject(self.U)
        return entry
