"""
Statement Splitter
Splits multi-statement SQL scripts on "GO" batch terminator lines
"""

import io

BATCH_TERMINATOR = "GO"
LINE_TERMINATOR = "\n"


class StatementSplitter:
    """Turns raw script text into standalone SQL statements"""

    @staticmethod
    def split(text):
        """
        Split script text into statements

        A line that equals "GO" once trailing whitespace is removed
        (case-insensitive) ends the current statement and is dropped.
        A trailing statement without a final "GO" is still returned.
        Blank statements are never returned.

        Args:
            text: Full script content

        Returns:
            list: Statements in file order
        """
        if not text:
            return []
        # Break only at \r, \n and \r\n, the same as reading the file in text mode
        lines = io.StringIO(text.lstrip("\ufeff"), newline=None)
        return list(StatementSplitter.iter_statements(lines))

    @staticmethod
    def iter_statements(lines):
        """
        Yield statements from an iterable of lines (e.g. an open file)

        Args:
            lines: Lines with or without their line terminators

        Yields:
            str: One statement per non-blank batch
        """
        buffer = []

        for line in lines:
            content = line.rstrip("\r\n")
            if StatementSplitter.is_terminator(content):
                statement = "".join(buffer)
                buffer = []
                if statement.strip():
                    yield statement
                continue

            # Normalize CRLF and keep the final line as-is when it had no newline
            if len(content) != len(line):
                buffer.append(content + LINE_TERMINATOR)
            else:
                buffer.append(content)

        statement = "".join(buffer)
        if statement.strip():
            yield statement

    @staticmethod
    def is_terminator(line):
        """Check whether a line (without its newline) is a batch terminator"""
        return line.rstrip().upper() == BATCH_TERMINATOR
