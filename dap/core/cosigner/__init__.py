"""Cosigner authentication and parameter overrides"""
from dap.core.cosigner.cosigner import (
    cosigner_digest,
    cosign,
    verify_cosignature,
    apply_input_override,
    apply_output_overrides,
)
from dap.core.cosigner.data import (
    V2CosignerData,
    V3CosignerData,
    PriorityCosignerData,
)
from dap.core.cosigner.extra_data import (
    CosignerExtraData,
    encode_extra_data,
    decode_extra_data,
    merge_extra_data,
)

__all__ = [
    "cosigner_digest",
    "cosign",
    "verify_cosignature",
    "apply_input_override",
    "apply_output_overrides",
    "V2CosignerData",
    "V3CosignerData",
    "PriorityCosignerData",
    "CosignerExtraData",
    "encode_extra_data",
    "decode_extra_data",
    "merge_extra_data",
]
