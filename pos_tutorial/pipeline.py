"""Building, applying and scoring the POS tagger.

Usage::

    python -m pos_tutorial build --sample models/pos
    python -m pos_tutorial tag models/pos/model.crfsuite "Forte is a data-centric ML framework"
    python -m pos_tutorial evaluate path/to/heldout models/pos/model.crfsuite
"""
# SOURCE_MARKER_BEGIN_import
import argparse
import logging
import os
import sys
import tempfile
from typing import List, Optional

from forte import Pipeline
from forte.data.data_pack import DataPack
from forte.data.readers import StringReader
from fortex.spacy import SpacyProcessor
from ft.onto.base_ontology import Sentence, Token

from pos_tutorial.classifier import CRFSuiteClassifier, Evaluation, evaluate, train
from pos_tutorial.instances import TRAINING_DATA_FILE, InstanceWriter, read_instances
from pos_tutorial.readers import TreebankReader, sample_treebank_dir
from pos_tutorial.tagger import POSAnnotator

# SOURCE_MARKER_END_import

DEFAULT_OUTPUT_DIRECTORY = "tmp/pos"


# SOURCE_MARKER_BEGIN_build_model
def build_training_data(data_dir: str, output_dir: str, file_ext: str = ".mrg") -> int:
    """Write one training instance per gold sentence found under ``data_dir``."""
    writer = InstanceWriter(output_dir)
    try:
        pipeline: Pipeline = Pipeline[DataPack]()
        pipeline.set_reader(TreebankReader(), {"file_ext": file_ext})
        pipeline.add(POSAnnotator(is_training=True, data_writer=writer))
        pipeline.run(data_dir)
    finally:
        writer.close()

    return writer.count


def build_model(
    data_dir: str, output_dir: str = DEFAULT_OUTPUT_DIRECTORY, file_ext: str = ".mrg", **train_args
) -> str:
    count = build_training_data(data_dir, output_dir, file_ext)
    logging.info("Built %d training instances from %s", count, data_dir)
    return train(output_dir, **train_args)


# SOURCE_MARKER_END_build_model


# SOURCE_MARKER_BEGIN_pipeline
def tagging_pipeline(model_path: str) -> Pipeline:
    pipeline: Pipeline = Pipeline[DataPack]()
    pipeline.set_reader(StringReader())
    pipeline.add(SpacyProcessor(), {"processors": ["sentence", "tokenize"]})
    pipeline.add(POSAnnotator(is_training=False), {"model_path": model_path})
    return pipeline.initialize()


def tag_text(text: str, model_path: str) -> DataPack:
    return tagging_pipeline(model_path).process(text)


# SOURCE_MARKER_END_pipeline


def evaluate_model(data_dir: str, model_path: str, file_ext: str = ".mrg") -> Evaluation:
    """Token accuracy of a model on the gold treebank files under ``data_dir``."""
    classifier = CRFSuiteClassifier(model_path)
    try:
        with tempfile.TemporaryDirectory() as gold_dir:
            build_training_data(data_dir, gold_dir, file_ext)
            return evaluate(
                classifier, read_instances(os.path.join(gold_dir, TRAINING_DATA_FILE))
            )
    finally:
        classifier.close()


def format_tagged(pack: DataPack) -> List[str]:
    return [
        " ".join(f"{token.text}[{token.pos}]" for token in pack.get(Token, sentence))
        for sentence in pack.get(Sentence)
    ]


def _data_dir(args) -> str:
    if args.sample:
        return sample_treebank_dir()
    if not args.data_dir:
        raise SystemExit("Either a data directory or --sample is required.")
    return args.data_dir


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(prog="pos-tutorial", description=__doc__.split("\n")[0])
    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser("build", help="Write training data and train a model.")
    build.add_argument("output_dir", nargs="?", default=DEFAULT_OUTPUT_DIRECTORY)
    build.add_argument("--data-dir", help="Directory of bracketed treebank files.")
    build.add_argument("--sample", action="store_true", help="Use the nltk treebank sample.")
    build.add_argument("--file-ext", default=".mrg")
    build.add_argument("--c1", type=float, default=1.0)
    build.add_argument("--c2", type=float, default=1e-3)
    build.add_argument("--max-iterations", type=int, default=100)

    tag = subparsers.add_parser("tag", help="Tag raw text with a trained model.")
    tag.add_argument("model_path")
    tag.add_argument("text")

    score = subparsers.add_parser("evaluate", help="Token accuracy on gold treebank files.")
    score.add_argument("model_path")
    score.add_argument("--data-dir")
    score.add_argument("--sample", action="store_true")
    score.add_argument("--file-ext", default=".mrg")

    args = parser.parse_args(argv)
    logging.basicConfig(stream=sys.stdout, level=logging.INFO)

    if args.command == "build":
        model_path = build_model(
            _data_dir(args),
            args.output_dir,
            args.file_ext,
            c1=args.c1,
            c2=args.c2,
            max_iterations=args.max_iterations,
        )
        logging.info("Model is ready at %s", model_path)
    elif args.command == "tag":
        for line in format_tagged(tag_text(args.text, args.model_path)):
            print(line)
    else:
        result = evaluate_model(_data_dir(args), args.model_path, args.file_ext)
        logging.info(
            "Accuracy: %.4f (%d/%d tokens)", result.accuracy, result.correct, result.total
        )


if __name__ == "__main__":
    main()
