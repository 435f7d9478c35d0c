"""
Variable substitution module.
Placeholder typing, registry merging and preview/carrier substitution.
"""

from .registry import VariableDescriptor, VariableRegistry, VariableType
from .substitution import SubstitutionResult, VariableSubstitutor, escape_attribute

__all__ = [
    'VariableDescriptor',
    'VariableRegistry',
    'VariableType',
    'SubstitutionResult',
    'VariableSubstitutor',
    'escape_attribute',
]
