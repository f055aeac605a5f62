import logging
import os
from contextlib import ExitStack
from pathlib import Path
from typing import IO, Literal, Union

logger = logging.getLogger(__name__)


class OutputError(OSError):
    """Raised when the output directory or a shard file cannot be created."""


def training_path(output_dir: Path, index: int) -> Path:
    return output_dir / f"graph_{index}.tsv"


def validation_path(output_dir: Path, index: int) -> Path:
    return output_dir / f"graph_{index}.tsv.validate"


def format_record(user_id: int, item_id: int, rating: float, precision: int = 6) -> str:
    # %g with 6 digits matches the default ostream rendering of a double
    return f"{user_id}\t{item_id}\t{rating:.{precision}g}\n"


class ShardedWriter:
    """
    Owns `nfiles` training and `nfiles` validation streams under one directory.

    Use as a context manager: entering creates the directory and opens every
    shard, leaving closes each stream once, whatever the exit path.
    """

    def __init__(
        self,
        output_dir: Union[str, Path],
        nfiles: int,
        *,
        precision: int = 6,
        on_open_error: Literal["raise", "log"] = "raise",
    ):
        if nfiles < 1:
            raise ValueError(f"nfiles must be ≥1; got {nfiles}")
        self.output_dir = Path(output_dir)
        self.nfiles = nfiles
        self.precision = precision
        self.on_open_error = on_open_error
        self.training_counts = [0] * nfiles
        self.validation_counts = [0] * nfiles
        self.discarded_count = 0
        self.failed_paths: list[Path] = []
        self._dead_train: set[int] = set()
        self._dead_validate: set[int] = set()
        self._train: list[IO[str]] = []
        self._validate: list[IO[str]] = []
        self._stack: ExitStack | None = None

    def shard_index(self, user_id: int) -> int:
        return user_id % self.nfiles

    @property
    def paths(self) -> list[Path]:
        out = []
        for i in range(self.nfiles):
            out.append(training_path(self.output_dir, i))
            out.append(validation_path(self.output_dir, i))
        return out

    def _fail(self, msg: str, err: OSError) -> None:
        logger.error("%s: %s", msg, err)
        if self.on_open_error == "raise":
            raise OutputError(f"{msg}: {err}") from err

    def _make_dir(self) -> None:
        logger.info("Creating data directory: %s", self.output_dir)
        if self.output_dir.is_dir():
            logger.warning(
                "Directory %s already exists; existing shards will be overwritten",
                self.output_dir,
            )
            return
        try:
            self.output_dir.mkdir(parents=True)
        except OSError as e:
            self._fail(f"Error creating directory {self.output_dir}", e)

    def _open(self, stack: ExitStack, path: Path, dead: set[int], index: int) -> IO[str]:
        try:
            return stack.enter_context(open(path, "w", encoding="utf-8"))
        except OSError as e:
            self._fail(f"Error creating file {path}", e)
            # "log" policy: records routed to this shard are discarded
            self.failed_paths.append(path)
            dead.add(index)
            return stack.enter_context(open(os.devnull, "w", encoding="utf-8"))

    def __enter__(self) -> "ShardedWriter":
        self._make_dir()
        logger.info("Opening %d shard pairs", self.nfiles)
        with ExitStack() as stack:
            for i in range(self.nfiles):
                self._train.append(self._open(
                    stack, training_path(self.output_dir, i), self._dead_train, i
                ))
                self._validate.append(self._open(
                    stack, validation_path(self.output_dir, i), self._dead_validate, i
                ))
            # only keep the streams once every shard is open
            self._stack = stack.pop_all()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        if self._stack is not None:
            self._stack.close()
            self._stack = None
        self._train = []
        self._validate = []

    def write_training(self, file_id: int, user_id: int, item_id: int, rating: float) -> None:
        self._train[file_id].write(format_record(user_id, item_id, rating, self.precision))
        if file_id in self._dead_train:
            self.discarded_count += 1
        else:
            self.training_counts[file_id] += 1

    def write_validation(self, file_id: int, user_id: int, item_id: int, rating: float) -> None:
        self._validate[file_id].write(format_record(user_id, item_id, rating, self.precision))
        if file_id in self._dead_validate:
            self.discarded_count += 1
        else:
            self.validation_counts[file_id] += 1
