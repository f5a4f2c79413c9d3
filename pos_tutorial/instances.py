import json
import logging
import os
from typing import Iterable, Iterator, List, NamedTuple

from pos_tutorial.features import Features

TRAINING_DATA_FILE = "training-data.jsonl"


class Instance(NamedTuple):
    """The features and gold labels of one sentence, aligned by position."""

    features: List[Features]
    labels: List[str]

    @classmethod
    def create(cls, features: List[Features], labels: List[str]) -> "Instance":
        if len(features) != len(labels):
            raise ValueError(
                f"Got {len(features)} feature sets but {len(labels)} labels."
            )
        return cls(list(features), list(labels))


class InstanceWriter:
    """Writes training instances as JSON lines under ``output_dir``.

    The file is truncated when the writer is created, so one writer holds the
    training data of exactly one run.
    """

    def __init__(self, output_dir: str):
        os.makedirs(output_dir, exist_ok=True)
        self.path = os.path.join(output_dir, TRAINING_DATA_FILE)
        self._out = open(self.path, "w", encoding="utf-8")
        self.count = 0

    def write(self, instances: Iterable[Instance]):
        for instance in instances:
            record = {"features": instance.features, "labels": instance.labels}
            self._out.write(json.dumps(record, ensure_ascii=False))
            self._out.write("\n")
            self.count += 1
        self._out.flush()

    def close(self):
        if not self._out.closed:
            self._out.close()
            logging.info("Wrote %d training instances to %s", self.count, self.path)


def read_instances(path: str) -> Iterator[Instance]:
    with open(path, encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            if not line.strip():
                continue
            try:
                record = json.loads(line)
                yield Instance.create(record["features"], record["labels"])
            except (ValueError, KeyError, TypeError) as e:
                raise ValueError(
                    f"Malformed training instance at {path}:{lineno}: {e}"
                ) from e
