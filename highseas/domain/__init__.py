"""
highseas.domain - Canonical data models, enumerations and error types.

Nothing in here imports from other highseas sub-packages except
``highseas.core`` (stdlib / pydantic only otherwise).
"""
