"""
Table text parsing utilities.

Split exported spreadsheet text into rows of header -> value mappings.
Only the quoting that real listing exports use is handled: a double quote
toggles quoted mode, and commas inside quoted mode are kept as text.
"""

from collections.abc import Iterator

RawRow = dict[str, str]


def split_line(line: str) -> list[str]:
    """
    Split a single line into fields, keeping commas inside quotes.

    Args:
        line: One line of the export (no trailing newline)

    Returns:
        List of trimmed field values with surrounding quotes stripped

    Examples:
        >>> split_line('A,"B,C",D')
        ['A', 'B,C', 'D']
        >>> split_line('  x , y ')
        ['x', 'y']
        >>> split_line('')
        ['']
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
    fields.append("".join(current))

    return [_clean_field(value) for value in fields]


def _clean_field(value: str) -> str:
    """Strip one leading/trailing quote and surrounding whitespace."""
    value = value.strip()
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value.strip()


def iter_rows(text: str) -> Iterator[tuple[int, RawRow]]:
    """
    Iterate over data rows of an export, paired with their line index.

    The first non-blank line is the header. The index is the position of
    the line in the file (blank lines still count), so it stays
    the same as long as the lines above it do not change.

    Args:
        text: Whole export as text

    Yields:
        (row_index, row) tuples, row_index starting at 1
    """
    headers: list[str] | None = None

    for index, line in enumerate(text.split("\n")):
        line = line.strip()
        if not line:
            continue

        values = split_line(line)

        if headers is None:
            headers = values
            continue

        yield index, _build_row(headers, values)


def _build_row(headers: list[str], values: list[str]) -> RawRow:
    """
    Map field values onto headers.

    Missing trailing fields become "". Surplus fields come from unquoted
    commas in the last column (photo lists are usually last), so they are
    joined back onto it.
    """
    row: RawRow = {}
    for position, header in enumerate(headers):
        row[header] = values[position] if position < len(values) else ""

    if headers and len(values) > len(headers):
        tail = [row[headers[-1]], *values[len(headers):]]
        row[headers[-1]] = ", ".join(value for value in tail if value)

    return row


def tokenize(text: str) -> list[RawRow]:
    """
    Parse an export into a list of rows.

    Args:
        text: Whole export as text

    Returns:
        List of header -> value mappings, blank lines skipped

    Examples:
        >>> tokenize("Title,Price\\nA,1\\n\\nB,2")
        [{'Title': 'A', 'Price': '1'}, {'Title': 'B', 'Price': '2'}]
    """
    return [row for _, row in iter_rows(text)]
