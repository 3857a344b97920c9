"""Validation utilities for the application."""
import re
from datetime import date, datetime
from enum import Enum
from typing import Dict, List, Any, Type

class ValidationError(Exception):
    """Custom validation error."""
    pass

class Validator:
    """Validation helper class."""
    
    @staticmethod
    def validate_email(email: str) -> bool:
        """Validate email format."""
        if not email:
            return False
        pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
        return bool(re.match(pattern, email))
    
    @staticmethod
    def validate_mobile(mobile: str) -> bool:
        """Validate phone number: digits with optional +, spaces or dashes."""
        if not mobile:
            return False
        digits = re.sub(r'[\s\-]', '', mobile)
        return bool(re.match(r'^\+?\d{7,15}$', digits))
    
    @staticmethod
    def validate_name(name: str) -> Dict[str, Any]:
        """Validate a person's name."""
        errors = []
        
        if not name or not name.strip():
            errors.append("Name is required")
        elif len(name.strip()) < 2:
            errors.append("Name must be at least 2 characters long")
        elif len(name.strip()) > 100:
            errors.append("Name is too long")
        
        return {
            "is_valid": len(errors) == 0,
            "errors": errors
        }
    
    @staticmethod
    def validate_required_fields(data: Dict, required_fields: List[str]) -> Dict[str, Any]:
        """Validate required fields in data."""
        errors = []
        
        for field in required_fields:
            if field not in data or data[field] in (None, ''):
                errors.append(f"{field.replace('_', ' ').title()} is required")
        
        return {
            "is_valid": len(errors) == 0,
            "errors": errors
        }
    
    @staticmethod
    def validate_json_object(data: Any, required: bool = True) -> Dict:
        """Return a request body that must be a JSON object."""
        if data is None and not required:
            return {}
        if not isinstance(data, dict) or (required and not data):
            raise ValidationError("Request body must be a JSON object")
        return data

    @staticmethod
    def validate_text_fields(data: Dict, fields: List[str]) -> None:
        """Fields that are present must be strings."""
        for field in fields:
            if data.get(field) is not None and not isinstance(data[field], str):
                raise ValidationError(f"{field.replace('_', ' ').title()} must be text")

    @staticmethod
    def validate_id_list(ids: Any) -> List[int]:
        """A non-empty list of integer ids; booleans are not ids."""
        if not isinstance(ids, list) or not all(
                isinstance(i, int) and not isinstance(i, bool) for i in ids):
            raise ValidationError("ids must be a list of member ids")
        if not ids:
            raise ValidationError("No members selected")
        return ids

    @staticmethod
    def parse_enum(enum_class: Type[Enum], value: str, field: str) -> Enum:
        """Look up an enum member by its value, raising ValidationError."""
        try:
            return enum_class(value)
        except ValueError:
            allowed = ', '.join(member.value for member in enum_class)
            raise ValidationError(f"Invalid {field}: {value!r}. Allowed: {allowed}")
    
    @staticmethod
    def parse_date(value: str) -> date:
        """Parse a YYYY-MM-DD date."""
        try:
            return datetime.strptime(value, '%Y-%m-%d').date()
        except (TypeError, ValueError):
            raise ValidationError("Invalid date format. Use YYYY-MM-DD")
    
    @staticmethod
    def parse_month(value: str) -> str:
        """Validate a YYYY-MM month key."""
        try:
            return datetime.strptime(value, '%Y-%m').strftime('%Y-%m')
        except (TypeError, ValueError):
            raise ValidationError("Invalid month format. Use YYYY-MM")
