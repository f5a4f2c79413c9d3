"""Converting sentences to classifier input and classifier output back to labels.

Both directions share the same feature extraction, so the features seen at
training time are exactly the ones a trained model is queried with.
"""
from typing import List, Optional, Protocol, Sequence

from forte.common.exception import ProcessExecutionException

from pos_tutorial.features import FeatureFunction, Features, extract_features
from pos_tutorial.instances import Instance


class MalformedDocumentError(ProcessExecutionException):
    pass


class MissingLabelError(MalformedDocumentError):
    """A token has no gold label in training mode."""


class LabelCountMismatchError(ProcessExecutionException):
    """The classifier returned a different number of labels than tokens."""


class SequenceClassifier(Protocol):
    def classify(self, features: List[Features]) -> List[str]:
        ...


# SOURCE_MARKER_BEGIN_training_instance
def training_instance(
    words: Sequence[str],
    labels: Sequence[Optional[str]],
    extractors: Sequence[FeatureFunction],
) -> Optional[Instance]:
    """Build the training instance of one sentence, or None if it is empty."""
    if len(words) != len(labels):
        raise ValueError(f"Got {len(words)} words but {len(labels)} labels.")
    if not words:
        return None

    for word, label in zip(words, labels):
        if label is None:
            raise MissingLabelError(f"Token [{word}] has no gold POS tag.")

    return Instance.create(extract_features(words, extractors), list(labels))


# SOURCE_MARKER_END_training_instance


# SOURCE_MARKER_BEGIN_predict_labels
def predict_labels(
    words: Sequence[str],
    classifier: SequenceClassifier,
    extractors: Sequence[FeatureFunction],
) -> List[str]:
    """Classify a whole sentence in one call; label i belongs to word i."""
    if not words:
        return []

    predicted = list(classifier.classify(extract_features(words, extractors)))
    if len(predicted) != len(words):
        raise LabelCountMismatchError(
            f"Classifier returned {len(predicted)} labels for a sentence "
            f"of {len(words)} tokens."
        )
    return predicted


# SOURCE_MARKER_END_predict_labels
