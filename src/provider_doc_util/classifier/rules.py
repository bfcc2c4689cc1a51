"""Prefix and response-code rules applied to each operation."""

DEFAULT_RESPONSE_CODE = "200"

# Checked in order; anything unmatched is "exec". No prefix maps to "update".
VERB_PREFIXES = (
    (("get", "list"), "select"),
    (("create",), "insert"),
    (("delete",), "delete"),
)


def sql_verb(method_id: str) -> str:
    """Map a normalized method id to select, insert, delete or exec."""
    for prefixes, verb in VERB_PREFIXES:
        if method_id.startswith(prefixes):
            return verb
    return "exec"


def select_response_code(responses: dict | None) -> str:
    """Return the last 2xx response code in source order, or "200".

    The returned code may not exist in ``responses`` when no 2xx is defined.
    """
    code = DEFAULT_RESPONSE_CODE
    for key in (responses or {}):
        if str(key).startswith("2"):
            code = str(key)
    return code
