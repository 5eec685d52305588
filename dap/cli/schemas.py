"""
JSON order file schemas.

Integers may be given as JSON numbers or as decimal / 0x-hex strings
(amounts routinely exceed what JSON tools handle as numbers). Addresses
and byte fields are 0x-hex strings.
"""

from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, TypeAdapter, model_validator

from dap.core.cosigner import PriorityCosignerData, V2CosignerData, V3CosignerData
from dap.core.decay import DecayCurve
from dap.core.order import (
    DutchInput,
    DutchOutput,
    ExclusiveDutchOrder,
    PriorityInput,
    PriorityOrder,
    PriorityOutput,
    V2DutchOrder,
    V3DutchInput,
    V3DutchOrder,
    V3DutchOutput,
)
from dap.core.types import OrderInfo
from dap.crypto import ZERO_ADDRESS, hex_to_bytes
from dap.utils.validation import (
    validate_address_hex,
    validate_curve_points,
    validate_hex_string,
    validate_int256,
    validate_signature_hex,
    validate_uint16,
    validate_uint256,
)


def _to_int(value) -> int:
    if isinstance(value, str):
        return int(value, 0)
    return value


def _parse_uint(value) -> int:
    value = _to_int(value)
    valid, err = validate_uint256(value)
    if not valid:
        raise ValueError(err)
    return value


def _parse_int(value) -> int:
    value = _to_int(value)
    valid, err = validate_int256(value)
    if not valid:
        raise ValueError(err)
    return value


def _parse_uint16(value) -> int:
    value = _to_int(value)
    valid, err = validate_uint16(value)
    if not valid:
        raise ValueError(err)
    return value


def _parse_address(value) -> bytes:
    if value is None:
        return ZERO_ADDRESS
    valid, err = validate_address_hex(value)
    if not valid:
        raise ValueError(err)
    return hex_to_bytes(value)


def _parse_hex(value) -> bytes:
    valid, err = validate_hex_string(value, "bytes")
    if not valid:
        raise ValueError(err)
    return hex_to_bytes(value)


def _parse_signature(value) -> bytes:
    valid, err = validate_signature_hex(value)
    if not valid:
        raise ValueError(err)
    return hex_to_bytes(value)


Uint = Annotated[int, BeforeValidator(_parse_uint)]
Int = Annotated[int, BeforeValidator(_parse_int)]
Uint16 = Annotated[int, BeforeValidator(_parse_uint16)]
Address = Annotated[bytes, BeforeValidator(_parse_address)]
HexBytes = Annotated[bytes, BeforeValidator(_parse_hex)]
Signature = Annotated[bytes, BeforeValidator(_parse_signature)]


class _Model(BaseModel):
    model_config = ConfigDict(extra="forbid")


# =============================================================================
# Shared
# =============================================================================


class OrderInfoModel(_Model):
    reactor: Address
    swapper: Address
    nonce: Uint
    deadline: Uint
    additional_validation_contract: Address = ZERO_ADDRESS
    additional_validation_data: HexBytes = b""

    def build(self) -> OrderInfo:
        return OrderInfo(**self.model_dump())


class CurveModel(_Model):
    relative_blocks: List[Uint16] = Field(default_factory=list)
    relative_amounts: List[Int] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_shape(self):
        valid, err = validate_curve_points(self.relative_blocks, self.relative_amounts)
        if not valid:
            raise ValueError(err)
        return self

    def build(self) -> DecayCurve:
        return DecayCurve(tuple(self.relative_blocks), tuple(self.relative_amounts))


# =============================================================================
# Linear
# =============================================================================


class DutchInputModel(_Model):
    token: Address
    start_amount: Uint
    end_amount: Uint

    def build(self) -> DutchInput:
        return DutchInput(**self.model_dump())


class DutchOutputModel(_Model):
    token: Address
    start_amount: Uint
    end_amount: Uint
    recipient: Address

    def build(self) -> DutchOutput:
        return DutchOutput(**self.model_dump())


class ExclusiveDutchOrderModel(_Model):
    type: Literal["exclusive_dutch"]
    info: OrderInfoModel
    decay_start_time: Uint
    decay_end_time: Uint
    input: DutchInputModel
    outputs: List[DutchOutputModel]
    exclusive_filler: Address = ZERO_ADDRESS
    exclusivity_override_bps: Uint = 0

    def build(self) -> ExclusiveDutchOrder:
        return ExclusiveDutchOrder(
            info=self.info.build(),
            decay_start_time=self.decay_start_time,
            decay_end_time=self.decay_end_time,
            input=self.input.build(),
            outputs=tuple(o.build() for o in self.outputs),
            exclusive_filler=self.exclusive_filler,
            exclusivity_override_bps=self.exclusivity_override_bps,
        )


class V2CosignerDataModel(_Model):
    decay_start_time: Uint
    decay_end_time: Uint
    exclusive_filler: Address = ZERO_ADDRESS
    exclusivity_override_bps: Uint = 0
    input_override: Uint = 0
    output_overrides: List[Uint] = Field(default_factory=list)

    def build(self) -> V2CosignerData:
        return V2CosignerData(**self.model_dump())


class V2DutchOrderModel(_Model):
    type: Literal["v2"]
    info: OrderInfoModel
    cosigner: Address
    base_input: DutchInputModel
    base_outputs: List[DutchOutputModel]
    cosigner_data: V2CosignerDataModel
    cosignature: Signature = b""

    def build(self) -> V2DutchOrder:
        return V2DutchOrder(
            info=self.info.build(),
            cosigner=self.cosigner,
            base_input=self.base_input.build(),
            base_outputs=tuple(o.build() for o in self.base_outputs),
            cosigner_data=self.cosigner_data.build(),
            cosignature=self.cosignature,
        )


# =============================================================================
# Curve
# =============================================================================


class V3DutchInputModel(_Model):
    token: Address
    start_amount: Uint
    curve: CurveModel
    max_amount: Uint
    adjustment_per_gwei_base_fee: Uint = 0

    def build(self) -> V3DutchInput:
        return V3DutchInput(
            token=self.token,
            start_amount=self.start_amount,
            curve=self.curve.build(),
            max_amount=self.max_amount,
            adjustment_per_gwei_base_fee=self.adjustment_per_gwei_base_fee,
        )


class V3DutchOutputModel(_Model):
    token: Address
    start_amount: Uint
    curve: CurveModel
    recipient: Address
    min_amount: Uint
    adjustment_per_gwei_base_fee: Uint = 0

    def build(self) -> V3DutchOutput:
        return V3DutchOutput(
            token=self.token,
            start_amount=self.start_amount,
            curve=self.curve.build(),
            recipient=self.recipient,
            min_amount=self.min_amount,
            adjustment_per_gwei_base_fee=self.adjustment_per_gwei_base_fee,
        )


class V3CosignerDataModel(_Model):
    decay_start_block: Uint
    exclusive_filler: Address = ZERO_ADDRESS
    exclusivity_override_bps: Uint = 0
    input_override: Uint = 0
    output_overrides: List[Uint] = Field(default_factory=list)

    def build(self) -> V3CosignerData:
        return V3CosignerData(**self.model_dump())


class V3DutchOrderModel(_Model):
    type: Literal["v3"]
    info: OrderInfoModel
    cosigner: Address
    starting_base_fee: Uint = 0
    base_input: V3DutchInputModel
    base_outputs: List[V3DutchOutputModel]
    cosigner_data: V3CosignerDataModel
    cosignature: Signature = b""

    def build(self) -> V3DutchOrder:
        return V3DutchOrder(
            info=self.info.build(),
            cosigner=self.cosigner,
            starting_base_fee=self.starting_base_fee,
            base_input=self.base_input.build(),
            base_outputs=tuple(o.build() for o in self.base_outputs),
            cosigner_data=self.cosigner_data.build(),
            cosignature=self.cosignature,
        )


# =============================================================================
# Priority
# =============================================================================


class PriorityInputModel(_Model):
    token: Address
    amount: Uint
    mps_per_priority_fee_wei: Uint = 0

    def build(self) -> PriorityInput:
        return PriorityInput(**self.model_dump())


class PriorityOutputModel(_Model):
    token: Address
    amount: Uint
    recipient: Address
    mps_per_priority_fee_wei: Uint = 0

    def build(self) -> PriorityOutput:
        return PriorityOutput(**self.model_dump())


class PriorityOrderModel(_Model):
    type: Literal["priority"]
    info: OrderInfoModel
    auction_start_block: Uint
    input: PriorityInputModel
    outputs: List[PriorityOutputModel]
    baseline_priority_fee_wei: Uint = 0
    cosigner: Address = ZERO_ADDRESS
    auction_target_block: Uint = 0
    cosignature: Signature = b""

    def build(self) -> PriorityOrder:
        return PriorityOrder(
            info=self.info.build(),
            auction_start_block=self.auction_start_block,
            input=self.input.build(),
            outputs=tuple(o.build() for o in self.outputs),
            baseline_priority_fee_wei=self.baseline_priority_fee_wei,
            cosigner=self.cosigner,
            cosigner_data=PriorityCosignerData(self.auction_target_block),
            cosignature=self.cosignature,
        )


OrderModel = Annotated[
    Union[ExclusiveDutchOrderModel, V2DutchOrderModel, V3DutchOrderModel, PriorityOrderModel],
    Field(discriminator="type"),
]

_order_adapter = TypeAdapter(OrderModel)


def parse_order(data):
    """
    Build an order from decoded JSON.

    Raises:
        pydantic.ValidationError: malformed order file
    """
    return _order_adapter.validate_python(data).build()
