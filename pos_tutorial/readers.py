"""forte readers that produce documents with gold sentences, tokens and POS tags."""
import logging
import os
from typing import Any, Iterator, List, Optional, Sequence, Tuple

import nltk
from nltk.corpus.reader import BracketParseCorpusReader
from forte.data.base_reader import PackReader
from forte.data.data_pack import DataPack
from forte.data.data_utils_io import dataset_path_iterator
from ft.onto.base_ontology import Document, Sentence, Token

TaggedSentence = Sequence[Tuple[str, Optional[str]]]

EMPTY_ELEMENT_TAG = "-NONE-"


def add_tagged_sentences(pack: DataPack, sentences: Sequence[TaggedSentence]):
    """Annotate ``pack`` with the given sentences.

    The text is the words joined by single spaces, one sentence per line. The
    pack text must already be set to exactly that string.
    """
    offset = 0
    for sentence in sentences:
        sentence_begin = offset
        for i, (word, tag) in enumerate(sentence):
            if i > 0:
                offset += 1
            token = Token(pack, offset, offset + len(word))
            token.pos = tag
            offset += len(word)
        Sentence(pack, sentence_begin, offset)
        # The newline after the sentence.
        offset += 1


def tagged_text(sentences: Sequence[TaggedSentence]) -> str:
    return "\n".join(" ".join(word for word, _ in sentence) for sentence in sentences)


class TaggedSentenceReader(PackReader):
    """Reads documents already split into ``(word, tag)`` sentences.

    Each item passed to the pipeline is one document: a list of sentences,
    each a list of ``(word, tag)`` pairs. ``tag`` may be None.
    """

    def _collect(  # type: ignore
        self, documents: Sequence[Sequence[TaggedSentence]]
    ) -> Iterator[Sequence[TaggedSentence]]:
        yield from documents

    def _cache_key_function(self, collection: Any) -> str:
        return str(hash(tagged_text(collection)))

    def _parse_pack(self, collection: Sequence[TaggedSentence]) -> Iterator[DataPack]:
        pack = DataPack()
        self.set_text(pack, tagged_text(collection))
        Document(pack, 0, len(pack.text))
        add_tagged_sentences(pack, collection)
        yield pack


class TreebankReader(PackReader):
    """Reads bracketed Penn Treebank files, one pack per file.

    Only words and POS tags are kept; empty elements such as traces are
    dropped.
    """

    def _collect(self, data_dir: str) -> Iterator[str]:  # type: ignore
        return dataset_path_iterator(data_dir, self.configs.file_ext)

    def _cache_key_function(self, file_path: str) -> str:
        return os.path.basename(file_path)

    # SOURCE_MARKER_BEGIN_treebank_reader
    def _parse_pack(self, file_path: str) -> Iterator[DataPack]:
        corpus = BracketParseCorpusReader(
            os.path.dirname(file_path), [os.path.basename(file_path)]
        )
        sentences: List[TaggedSentence] = [
            [(word, tag) for word, tag in sentence if tag != EMPTY_ELEMENT_TAG]
            for sentence in corpus.tagged_sents()
        ]
        logging.info("Read %d sentences from %s", len(sentences), file_path)

        pack = DataPack()
        self.set_text(pack, tagged_text(sentences))
        Document(pack, 0, len(pack.text))
        add_tagged_sentences(pack, sentences)
        pack.pack_name = os.path.basename(file_path)
        yield pack

    # SOURCE_MARKER_END_treebank_reader

    @classmethod
    def default_configs(cls):
        config = super().default_configs()
        config.update({"file_ext": ".mrg"})
        return config


def sample_treebank_dir() -> str:
    """Location of nltk's Penn Treebank sample, downloading it when missing."""
    try:
        return nltk.data.find("corpora/treebank/combined").path
    except LookupError:
        nltk.download("treebank")
        return nltk.data.find("corpora/treebank/combined").path
