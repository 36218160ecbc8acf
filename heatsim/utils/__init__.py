"""Shared parameters, metrics and plotting helpers."""
