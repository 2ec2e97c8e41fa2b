"""Prometheus exporter helpers."""

from __future__ import annotations

from prometheus_client import Counter


image_normalization_total = Counter(
    "image_normalization_total",
    "Image normalisation attempts by outcome.",
    ["outcome"],
)

jpeg_encode_passes_total = Counter(
    "jpeg_encode_passes_total",
    "Number of JPEG encodes performed by the quality search.",
)

product_submission_total = Counter(
    "product_submission_total",
    "Product submissions sent to the seller API by outcome.",
    ["outcome"],
)
