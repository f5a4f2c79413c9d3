"""A part-of-speech tagger built on forte and crfsuite.

The repository is a tutorial: the tagger itself only declares features,
turns sentences into training instances and writes classifier output back
to tokens. Everything else is done by forte, nltk, spaCy and crfsuite.
"""
from pos_tutorial.features import DEFAULT_EXTRACTORS, extract_features
from pos_tutorial.instances import Instance
from pos_tutorial.sequence import (
    LabelCountMismatchError,
    MalformedDocumentError,
    MissingLabelError,
    predict_labels,
    training_instance,
)
from pos_tutorial.tagger import POSAnnotator

__version__ = "0.1.0"
