from receipt_total.analysis.amount_normalizer import normalize_amount
from receipt_total.analysis.client_base import BaseVisionClient
from receipt_total.analysis.factory import VisionClientFactory
from receipt_total.analysis.invoker import AIInvoker
from receipt_total.analysis.prompt_loader import prompt_for

__all__ = [
    "AIInvoker",
    "BaseVisionClient",
    "VisionClientFactory",
    "normalize_amount",
    "prompt_for",
]
