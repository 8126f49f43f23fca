"""
CSV record source streamed in chunks
"""

import csv
import pandas as pd
from typing import Iterator, Optional, TextIO, Tuple
from pathlib import Path
from core.exceptions import MalformedInputError, SourceReadError
import logging
import re

logger = logging.getLogger(__name__)

RawRecord = Tuple[str, ...]

# pandas: "Error tokenizing data. C error: Expected 11 fields in line 5, saw 12"
_PARSER_LINE = re.compile(r"line (\d+)")


class CSVRecordSource:
    """
    Stream rows of a CSV file as positional string tuples.

    - The header row is consumed by the reader and kept for diagnostics
    - Values are never type-inferred; every field stays a string
    - Iteration is lazy and can only happen once
    """

    def __init__(
        self,
        file_path,
        chunk_size: int = 10000,
        encoding: str = "utf-8"
    ):
        self.file_path = Path(file_path)
        self.chunk_size = chunk_size
        self.encoding = encoding
        self.header: Optional[Tuple[str, ...]] = None
        self.records_read = 0
        self._consumed = False

    def __iter__(self) -> Iterator[RawRecord]:
        return self.iter_records()

    def iter_records(self) -> Iterator[RawRecord]:
        """
        Yield data rows in file order.

        Raises:
            SourceReadError: File missing or unreadable
            MalformedInputError: Column-count mismatch or encoding error
        """
        if self._consumed:
            raise RuntimeError(f"{self.file_path} has already been streamed")
        self._consumed = True

        if not self.file_path.is_file():
            raise SourceReadError(
                "CSV file not found",
                context={"file_path": str(self.file_path)}
            )

        logger.info(f"Reading CSV from {self.file_path}")

        try:
            reader = pd.read_csv(
                self.file_path,
                dtype=str,
                keep_default_na=False,
                index_col=False,
                chunksize=self.chunk_size,
                encoding=self.encoding,
                on_bad_lines="error",
                skip_blank_lines=True,
            )
        except pd.errors.EmptyDataError:
            logger.warning(f"CSV file is empty (no header row): {self.file_path}")
            return
        except OSError as e:
            raise SourceReadError(
                "Failed to open CSV file",
                context={"file_path": str(self.file_path)},
                original_exception=e
            )
        except (UnicodeDecodeError, pd.errors.ParserError) as e:
            raise MalformedInputError(
                "CSV header could not be parsed",
                context={"file_path": str(self.file_path), "line_number": 1},
                original_exception=e
            )

        try:
            raw = open(self.file_path, newline="", encoding=self.encoding)
        except OSError as e:
            reader.close()
            raise SourceReadError(
                "Failed to open CSV file",
                context={"file_path": str(self.file_path)},
                original_exception=e
            )

        # pandas pads short rows and may fold long ones into the index,
        # so raw field counts are taken from a second tokenizer in lockstep
        with reader, raw:
            field_counts = self._field_counts(raw)
            next(field_counts, None)
            for chunk in self._chunks(reader):
                if self.header is None:
                    self.header = tuple(str(c) for c in chunk.columns)
                    logger.debug(f"CSV header ({len(self.header)} columns): {self.header}")
                width = len(chunk.columns)
                for row in chunk.itertuples(index=False, name=None):
                    line_number, count = next(field_counts, (None, width))
                    if count != width:
                        raise MalformedInputError(
                            f"Expected {width} fields, saw {count}",
                            context={
                                "file_path": str(self.file_path),
                                "line_number": line_number,
                                "row_number": self.records_read + 1,
                            }
                        )
                    self.records_read += 1
                    yield row

        logger.info(f"Read {self.records_read} records from CSV")

    def _field_counts(self, raw: TextIO) -> Iterator[Tuple[int, int]]:
        """Yield (line number, field count) for every non-blank record, header included."""
        rows = csv.reader(raw)
        while True:
            try:
                fields = next(rows)
            except StopIteration:
                return
            except UnicodeDecodeError as e:
                raise MalformedInputError(
                    "Invalid byte sequence in CSV",
                    context={"file_path": str(self.file_path), "encoding": self.encoding},
                    original_exception=e
                )
            except csv.Error as e:
                raise MalformedInputError(
                    "CSV record could not be tokenized",
                    context={"file_path": str(self.file_path), "line_number": rows.line_num},
                    original_exception=e
                )
            # blank and whitespace-only lines are skipped by pandas too
            if not fields or (len(fields) == 1 and not fields[0].strip()):
                continue
            yield rows.line_num, len(fields)

    def _chunks(self, reader) -> Iterator[pd.DataFrame]:
        """Pull chunks, translating parser failures."""
        while True:
            try:
                chunk = next(reader)
            except StopIteration:
                return
            except pd.errors.ParserError as e:
                match = _PARSER_LINE.search(str(e))
                raise MalformedInputError(
                    "Column count mismatch",
                    context={
                        "file_path": str(self.file_path),
                        "line_number": int(match.group(1)) if match else None
                    },
                    original_exception=e
                )
            except UnicodeDecodeError as e:
                raise MalformedInputError(
                    "Invalid byte sequence in CSV",
                    context={"file_path": str(self.file_path), "encoding": self.encoding},
                    original_exception=e
                )
            except OSError as e:
                raise SourceReadError(
                    "Failed to read CSV file",
                    context={"file_path": str(self.file_path)},
                    original_exception=e
                )
            yield chunk
