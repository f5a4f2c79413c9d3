# SOURCE_MARKER_BEGIN_import
import logging
from typing import List, Optional, Sequence

from forte.common.configuration import Config
from forte.common.exception import ProcessorConfigError
from forte.common.resources import Resources
from forte.data.data_pack import DataPack
from forte.processors.base import PackProcessor
from ft.onto.base_ontology import Sentence, Token

from pos_tutorial.classifier import CRFSuiteClassifier
from pos_tutorial.features import DEFAULT_EXTRACTORS, FeatureFunction, check_extractors
from pos_tutorial.instances import InstanceWriter
from pos_tutorial.sequence import (
    MalformedDocumentError,
    SequenceClassifier,
    predict_labels,
    training_instance,
)

# SOURCE_MARKER_END_import


# SOURCE_MARKER_BEGIN_class
class POSAnnotator(PackProcessor):
    r"""Tags tokens with a sequence classifier over hand-written features.

    In training mode every sentence becomes one training instance for the
    data writer; otherwise the classifier labels each sentence and the
    predicted tags are written to ``Token.pos``.
    """

    def __init__(
        self,
        is_training: bool,
        extractors: Optional[Sequence[FeatureFunction]] = None,
        data_writer: Optional[InstanceWriter] = None,
        classifier: Optional[SequenceClassifier] = None,
    ):
        super().__init__()
        self._is_training = is_training
        self.extractors: List[FeatureFunction] = check_extractors(
            DEFAULT_EXTRACTORS if extractors is None else extractors
        )
        self.data_writer = data_writer
        self.classifier = classifier
        # collaborators built from configs in `initialize`, released in `finish`
        self._own_writer: Optional[InstanceWriter] = None
        self._own_classifier: Optional[CRFSuiteClassifier] = None

    @property
    def is_training(self) -> bool:
        return self._is_training

    def initialize(self, resources: Resources, configs: Config):
        super().initialize(resources, configs)
        self._release()

        if self.is_training and self.data_writer is None:
            if not configs.output_dir:
                raise ProcessorConfigError(
                    "POSAnnotator in training mode needs `output_dir`."
                )
            self._own_writer = InstanceWriter(configs.output_dir)
            self.data_writer = self._own_writer

        if not self.is_training and self.classifier is None:
            if not configs.model_path:
                raise ProcessorConfigError(
                    "POSAnnotator in classification mode needs `model_path`."
                )
            self._own_classifier = CRFSuiteClassifier(configs.model_path)
            self.classifier = self._own_classifier

    def _process(self, input_pack: DataPack):
        sentences = list(input_pack.get(Sentence))
        if not sentences and not input_pack.text.strip():
            logging.info("Pack %s has no text, nothing to tag.", input_pack.pack_name)
            return
        if not sentences:
            raise MalformedDocumentError(
                f"Pack [{input_pack.pack_name}] has no sentences to tag."
            )

        # the tokens of each sentence, in text order
        sentence_tokens = [list(input_pack.get(Token, s)) for s in sentences]

        if self.is_training:
            self._write_instances(sentence_tokens)
        else:
            self._tag(sentence_tokens)

        logging.info(
            "Processed pack %s with %d sentences.", input_pack.pack_name, len(sentences)
        )

    def _write_instances(self, sentence_tokens: List[List[Token]]):
        instances = []
        for tokens in sentence_tokens:
            instance = training_instance(
                [token.text for token in tokens],
                [token.pos for token in tokens],
                self.extractors,
            )
            if instance is not None:
                instances.append(instance)

        # nothing is written unless every sentence of the pack succeeded
        self.data_writer.write(instances)

    def _tag(self, sentence_tokens: List[List[Token]]):
        predictions = [
            predict_labels([token.text for token in tokens], self.classifier, self.extractors)
            for tokens in sentence_tokens
        ]

        for tokens, tags in zip(sentence_tokens, predictions):
            for token, tag in zip(tokens, tags):
                token.pos = tag

    def _release(self):
        if self._own_writer is not None:
            self._own_writer.close()
            self.data_writer = self._own_writer = None
        if self._own_classifier is not None:
            self._own_classifier.close()
            self.classifier = self._own_classifier = None

    def finish(self, resource: Resources):
        # injected collaborators belong to the caller and stay open
        self._release()
        super().finish(resource)

    @classmethod
    def default_configs(cls):
        config = super().default_configs()
        config.update(
            {
                # where training instances are written
                "output_dir": None,
                # crfsuite model used when not training
                "model_path": None,
            }
        )
        return config


# SOURCE_MARKER_END_class
