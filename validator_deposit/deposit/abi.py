"""
Contract call data for functions whose arguments all have a known size.

Static arguments (`bytesN`) are stored in the head, dynamic arguments
(`bytes`) are stored in the tail and referenced from the head by offsets
relative to the start of the arguments section. Because every value has a
fixed size, the offsets and the total length are known up front.
"""
from dataclasses import dataclass

from validator_deposit.common.exceptions import EncodingError
from validator_deposit.config.settings import DEPOSIT_FUNCTION_SELECTOR

WORD_SIZE = 32
SELECTOR_SIZE = 4


def padded_length(size: int) -> int:
    return -(-size // WORD_SIZE) * WORD_SIZE


def pad_right(value: bytes) -> bytes:
    return value + bytes(padded_length(len(value)) - len(value))


def encode_uint256(value: int) -> bytes:
    return value.to_bytes(WORD_SIZE, 'big')


@dataclass(frozen=True)
class AbiArgument:
    name: str
    size: int
    dynamic: bool = True


class FixedAbiLayout:
    def __init__(self, selector: bytes, arguments: list[AbiArgument]):
        if len(selector) != SELECTOR_SIZE:
            raise ValueError(f'Function selector must be {SELECTOR_SIZE} bytes')
        for argument in arguments:
            if not argument.dynamic and argument.size > WORD_SIZE:
                raise ValueError(f'Static argument "{argument.name}" does not fit into a word')

        self.selector = selector
        self.arguments = arguments

        # offsets of dynamic arguments
        self.offsets: dict[str, int] = {}
        cursor = WORD_SIZE * len(arguments)
        for argument in arguments:
            if argument.dynamic:
                self.offsets[argument.name] = cursor
                cursor += WORD_SIZE + padded_length(argument.size)
        self.length = SELECTOR_SIZE + cursor

    def encode(self, values: dict[str, bytes]) -> bytes:
        head = b''
        tail = b''
        for argument in self.arguments:
            value = values.get(argument.name)
            if value is None:
                raise EncodingError(f'Missing value for argument "{argument.name}"')
            if len(value) != argument.size:
                raise EncodingError(
                    f'Argument "{argument.name}" must be {argument.size} bytes, got {len(value)}'
                )

            if argument.dynamic:
                head += encode_uint256(self.offsets[argument.name])
                tail += encode_uint256(argument.size) + pad_right(value)
            else:
                head += pad_right(value)

        data = self.selector + head + tail
        if len(data) != self.length:
            raise EncodingError(f'Call data must be {self.length} bytes, got {len(data)}')
        return data

    def decode(self, data: bytes) -> dict[str, bytes]:
        if len(data) != self.length:
            raise EncodingError(f'Call data must be {self.length} bytes, got {len(data)}')
        if data[:SELECTOR_SIZE] != self.selector:
            raise EncodingError(f'Unexpected function selector 0x{data[:SELECTOR_SIZE].hex()}')

        args = data[SELECTOR_SIZE:]
        values = {}
        for index, argument in enumerate(self.arguments):
            word = args[index * WORD_SIZE : (index + 1) * WORD_SIZE]
            if not argument.dynamic:
                values[argument.name] = word[: argument.size]
                continue

            offset = int.from_bytes(word, 'big')
            if offset != self.offsets[argument.name]:
                raise EncodingError(f'Unexpected offset {offset} for argument "{argument.name}"')
            size = int.from_bytes(args[offset : offset + WORD_SIZE], 'big')
            if size != argument.size:
                raise EncodingError(f'Unexpected length {size} for argument "{argument.name}"')
            values[argument.name] = args[offset + WORD_SIZE : offset + WORD_SIZE + size]
        return values


DEPOSIT_PUBKEY_OFFSET = 0x80
DEPOSIT_WITHDRAWAL_CREDENTIALS_OFFSET = 0xE0
DEPOSIT_SIGNATURE_OFFSET = 0x120
DEPOSIT_CALL_DATA_LENGTH = 420

DEPOSIT_CALL_LAYOUT = FixedAbiLayout(
    selector=DEPOSIT_FUNCTION_SELECTOR,
    arguments=[
        AbiArgument('pubkey', 48),
        AbiArgument('withdrawal_credentials', 32),
        AbiArgument('signature', 96),
        AbiArgument('deposit_data_root', 32, dynamic=False),
    ],
)
