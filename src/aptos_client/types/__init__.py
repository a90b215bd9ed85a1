"""
Move-level types carried by transactions.

Identifiers, module ids, type tags, transaction arguments, and the payload
variants (script, entry function, orderless).
"""

from .arguments import (
    AddressArgument,
    BoolArgument,
    MoveOption,
    ScriptArgumentTag,
    SerializedArgument,
    StringArgument,
    TransactionArgument,
    U8Argument,
    U8VectorArgument,
    U16Argument,
    U32Argument,
    U64Argument,
    U128Argument,
    U256Argument,
    VectorArgument,
)
from .identifier import Identifier
from .module_id import ModuleId
from .orderless import (
    TransactionExecutable,
    TransactionExecutableEmpty,
    TransactionExecutableEntryFunction,
    TransactionExecutableScript,
    TransactionExtraConfigV1,
    TransactionInnerPayloadV1,
)
from .payload import EntryFunctionPayload, ScriptPayload, TransactionPayload, TransactionPayloadVariant
from .type_tag import StructTag, TypeTag, TypeTagVariant

__all__ = [
    "AddressArgument",
    "BoolArgument",
    "EntryFunctionPayload",
    "Identifier",
    "ModuleId",
    "MoveOption",
    "ScriptArgumentTag",
    "ScriptPayload",
    "SerializedArgument",
    "StringArgument",
    "StructTag",
    "TransactionArgument",
    "TransactionExecutable",
    "TransactionExecutableEmpty",
    "TransactionExecutableEntryFunction",
    "TransactionExecutableScript",
    "TransactionExtraConfigV1",
    "TransactionInnerPayloadV1",
    "TransactionPayload",
    "TransactionPayloadVariant",
    "TypeTag",
    "TypeTagVariant",
    "U8Argument",
    "U8VectorArgument",
    "U16Argument",
    "U32Argument",
    "U64Argument",
    "U128Argument",
    "U256Argument",
    "VectorArgument",
]
