"""Statement guard: only a single statement starting with SELECT gets through.

This is a textual allow-list, not a parser. It keeps mutation statements out
but does not inspect what a SELECT calls; the read-only store connection used
for execution is what actually prevents writes.
"""

import re

from tablequery.app.services.errors import EmptyQuery, NotAReadQuery

_READ_KEYWORD = re.compile(r"select\b", re.IGNORECASE)


def prepare_statement(sql: str) -> str:
    """Normalize user SQL and check it is a read query.

    Returns the statement without surrounding whitespace or trailing
    semicolons. Raises EmptyQuery or NotAReadQuery.
    """
    text = (sql or "").strip()
    end = len(text)
    while end and (text[end - 1] == ";" or text[end - 1].isspace()):
        end -= 1
    statement = text[:end]
    if not statement:
        raise EmptyQuery("SQL cannot be empty")

    if not _READ_KEYWORD.match(statement):
        first_word = statement.split()[0].upper()
        raise NotAReadQuery(
            f"Statement type '{first_word}' is not allowed. Only SELECT queries are allowed."
        )
    return statement
