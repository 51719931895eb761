"""Constants used by the standard security handler."""

from enum import IntFlag


class Core:
    """Keywords that don't quite belong anywhere else."""

    STANDARD = "/Standard"
    ID = "/ID"


class StreamAttributes:
    """Table 4.2 of the PDF 1.7 reference."""

    LENGTH = "/Length"  # integer, required
    FILTER = "/Filter"  # name or array of names
    DECODE_PARMS = "/DecodeParms"  # variable, optional


class EncryptionDictAttributes:
    """Table 3.18 and 3.19 of the PDF 1.7 reference."""

    FILTER = "/Filter"
    V = "/V"
    R = "/R"
    LENGTH = "/Length"
    P = "/P"
    O = "/O"  # noqa: E741
    U = "/U"


class UserAccessPermissions(IntFlag):
    """
    Table 3.20 User access permissions.

    Bit 1 and 2 are reserved and must be 0; bits 7, 8 and 13 to 32 must be
    1 for revision 3 handlers.
    """

    R1 = 1
    R2 = 2
    PRINT = 4
    MODIFY = 8
    EXTRACT = 16
    ADD_OR_MODIFY = 32
    R7 = 64
    R8 = 128
    FILL_FORM_FIELDS = 256
    EXTRACT_TEXT_FOR_ACCESSIBILITY = 512
    ASSEMBLE_DOC = 1024
    PRINT_TO_REPRESENTATION = 2048
    R13 = 2**12
    R14 = 2**13
    R15 = 2**14
    R16 = 2**15
    R17 = 2**16
    R18 = 2**17
    R19 = 2**18
    R20 = 2**19
    R21 = 2**20
    R22 = 2**21
    R23 = 2**22
    R24 = 2**23
    R25 = 2**24
    R26 = 2**25
    R27 = 2**26
    R28 = 2**27
    R29 = 2**28
    R30 = 2**29
    R31 = 2**30
    R32 = 2**31

    @classmethod
    def all(cls) -> "UserAccessPermissions":
        """Every operation permitted; encodes as 0xFFFFFFFC."""
        return cls((2**32 - 1) - cls.R1 - cls.R2)


SKIPPED_STREAM_KEYS = (
    StreamAttributes.LENGTH,
    StreamAttributes.FILTER,
    StreamAttributes.DECODE_PARMS,
)
