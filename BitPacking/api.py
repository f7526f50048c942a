#!/usr/bin/env python3

from can import Message

from .fields import BitField

# Standard (11-bit) identifiers top out here; anything larger is extended.
MAX_STANDARD_ID = 0x7FF


def make_message(field: BitField, arbitration_id: int, offset: int = 0) -> Message:
    """
    Constructs a python-can Message carrying a bit field's value.

    Args:
        field: The BitField to send.
        arbitration_id: CAN ID of the frame.
        offset: Byte offset of the field in the payload (preceded by zeros).

    Returns:
        A python-can Message object ready to be sent.
    """
    data = bytearray(offset) + field.to_bytes()
    if len(data) > 8:
        raise ValueError(f"Payload too long for a CAN frame: {len(data)} bytes")
    return Message(
        arbitration_id=arbitration_id,
        is_extended_id=arbitration_id > MAX_STANDARD_ID,
        data=data,
    )


def decode_field(msg: Message, template: BitField, offset: int = 0) -> BitField:
    """
    Decodes a bit field from a received message.

    Args:
        msg: A python-can Message.
        template: BitField giving the name, type and labels to decode into.
        offset: Byte offset of the field in the payload.

    Returns:
        A copy of the template holding the decoded value.
    """
    decoded = BitField.from_bytes(msg.data, int_type=template.int_type, offset=offset)
    return template.copy(value=decoded.value)
