"""
Utilities for validating plain dictionaries against Pydantic schemas.
"""

from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel, ValidationError


def format_validation_errors(error: ValidationError) -> List[str]:
    """Flatten a ValidationError into 'field.path: message' strings."""
    errors = []
    for item in error.errors():
        loc = '.'.join(str(part) for part in item['loc']) or '<root>'
        errors.append(f"{loc}: {item['msg']}")
    return errors


def validate_with_pydantic(
    data: Dict[str, Any],
    model: Type[BaseModel]
) -> tuple[bool, Optional[List[str]]]:
    """
    Validate data using a Pydantic model.

    Every field error is collected, not just the first one.

    Args:
        data: Dictionary to validate
        model: Pydantic model class to validate against

    Returns:
        Tuple of (passed, errors) where passed is bool and errors is list of error messages
    """
    try:
        model.model_validate(data)
        return True, None
    except ValidationError as e:
        return False, format_validation_errors(e)
