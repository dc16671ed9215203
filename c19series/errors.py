class SeriesError(Exception):
    pass


class SchemaError(SeriesError):
    """A file's header or shape is not what we expect.

    Fatal for the file being read; nothing from it has been applied."""


class DateMismatch(SeriesError):
    """Two things that should line up on the same date don't."""


class NotFound(SeriesError):
    pass


class ParseError(SeriesError):
    """A single row has a malformed field.  Callers skip the row."""


class EmptyDataset(SeriesError):
    pass
