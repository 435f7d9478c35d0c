"""Carrier metadata module."""

from .emitter import MetadataEmitter, insert_metadata, label_from_identifier

__all__ = ['MetadataEmitter', 'insert_metadata', 'label_from_identifier']
