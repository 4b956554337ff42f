"""Utility helpers for imagecache."""
