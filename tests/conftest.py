"""Shared helpers for running the POS annotator inside forte pipelines."""
import json
from pathlib import Path
from typing import Dict, List

import pytest
from forte import Pipeline
from forte.data.data_pack import DataPack

from pos_tutorial.readers import TaggedSentenceReader

DATA_DIR = Path(__file__).resolve().parent / "data"

CATS_SENTENCE = [("The", "DT"), ("3", "CD"), ("Cats", "NNS"), ("run", "VBP"), (".", ".")]


class ListWriter:
    """Collects instances in memory instead of writing a file."""

    def __init__(self):
        self.instances = []
        self.writes = 0
        self.closed = False

    @property
    def count(self):
        return len(self.instances)

    def write(self, instances):
        self.instances.extend(instances)
        self.writes += 1

    def close(self):
        self.closed = True


class GoldClassifier:
    """Answers with the gold labels of the instances it was built from."""

    def __init__(self, instances):
        self.gold: Dict[str, List[str]] = {
            json.dumps(i.features, sort_keys=True): i.labels for i in instances
        }
        self.calls = 0

    def classify(self, features):
        self.calls += 1
        return list(self.gold[json.dumps(features, sort_keys=True)])


class ConstantClassifier:
    def __init__(self, label="NN", drop=0):
        self.label = label
        self.drop = drop
        self.calls = []

    def classify(self, features):
        self.calls.append(features)
        return [self.label] * (len(features) - self.drop)


def run_pipeline(annotator, documents, reader=None, config=None) -> List[DataPack]:
    pipeline: Pipeline = Pipeline[DataPack]()
    pipeline.set_reader(reader if reader is not None else TaggedSentenceReader())
    pipeline.add(annotator, config)
    pipeline.initialize()
    packs = list(pipeline.process_dataset(documents))
    pipeline.finish()
    return packs


def read_pack(document) -> DataPack:
    pipeline: Pipeline = Pipeline[DataPack]()
    pipeline.set_reader(TaggedSentenceReader())
    pipeline.initialize()
    return pipeline.process([document])


@pytest.fixture
def treebank_dir() -> str:
    return str(DATA_DIR / "treebank")
