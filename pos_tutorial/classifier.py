import logging
import os
from typing import Iterable, List, NamedTuple

import pycrfsuite

from pos_tutorial.features import Features
from pos_tutorial.instances import TRAINING_DATA_FILE, Instance, read_instances
from pos_tutorial.sequence import LabelCountMismatchError

MODEL_FILE = "model.crfsuite"


# SOURCE_MARKER_BEGIN_train
def train(
    output_dir: str,
    c1: float = 1.0,
    c2: float = 1e-3,
    max_iterations: int = 100,
    feature_possible_transitions: bool = True,
) -> str:
    """Train a CRF on the instances written to ``output_dir``.

    The model is stored next to the training data and its path is returned.

    Args:
        output_dir (str): Directory holding the training data file.
        c1 (float): L1 regularization coefficient.
        c2 (float): L2 regularization coefficient.
        max_iterations (int): Maximum number of L-BFGS iterations.
        feature_possible_transitions (bool): Also learn weights for label
            transitions never seen in the training data.

    Returns:
        The path of the trained model.
    """
    trainer = pycrfsuite.Trainer(verbose=False)
    n_instances = 0
    for instance in read_instances(os.path.join(output_dir, TRAINING_DATA_FILE)):
        trainer.append(instance.features, instance.labels)
        n_instances += 1

    if n_instances == 0:
        raise ValueError(f"No training instances found in {output_dir}.")

    trainer.set_params(
        {
            "c1": c1,
            "c2": c2,
            "max_iterations": max_iterations,
            "feature.possible_transitions": feature_possible_transitions,
        }
    )

    model_path = os.path.join(output_dir, MODEL_FILE)
    logging.info("Training CRF on %d sentences.", n_instances)
    trainer.train(model_path)
    logging.info("Model written to %s", model_path)
    return model_path


# SOURCE_MARKER_END_train


class CRFSuiteClassifier:
    """Viterbi decoding with a trained crfsuite model."""

    def __init__(self, model_path: str):
        if not os.path.isfile(model_path):
            raise FileNotFoundError(f"No CRF model at {model_path}.")
        self.model_path = model_path
        self.tagger = pycrfsuite.Tagger()
        self.tagger.open(model_path)

    def classify(self, features: List[Features]) -> List[str]:
        return self.tagger.tag(features)

    def labels(self) -> List[str]:
        return self.tagger.labels()

    def close(self):
        self.tagger.close()


class Evaluation(NamedTuple):
    correct: int
    total: int

    @property
    def accuracy(self) -> float:
        return self.correct / self.total if self.total else 0.0


def evaluate(classifier, instances: Iterable[Instance]) -> Evaluation:
    correct, total = 0, 0
    for instance in instances:
        predicted = classifier.classify(instance.features)
        if len(predicted) != len(instance.labels):
            raise LabelCountMismatchError(
                f"Classifier returned {len(predicted)} labels for a sentence of "
                f"{len(instance.labels)} tokens."
            )
        correct += sum(p == g for p, g in zip(predicted, instance.labels))
        total += len(instance.labels)
    return Evaluation(correct, total)
