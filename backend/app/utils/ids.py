import uuid


def generate_call_id() -> str:
    return f"call_{uuid.uuid4().hex[:12]}"


def generate_quote_id() -> str:
    return f"QT-{uuid.uuid4().hex[:8].upper()}"
