"""Engine — TransferInterceptor, ConversionPipeline и фасад TaxToken."""

from .conversion import ConversionPipeline, ConversionReport, StakeholderWallets
from .interceptor import TransferInterceptor
from .tax_token import TaxToken

__all__ = [
    "TaxToken",
    "TransferInterceptor",
    "ConversionPipeline",
    "ConversionReport",
    "StakeholderWallets",
]
