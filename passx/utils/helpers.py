def mask_email(email: str) -> str:
    """Hide the middle of the local part for log lines, e.g. ``j**e@example.com``."""
    local, at, domain = email.partition("@")
    if not at or not local:
        return email

    hidden = "*" * max(len(local) - 2, 1)
    last = local[-1] if len(local) > 2 else ""
    return f"{local[0]}{hidden}{last}{at}{domain}"
