import logging

import pytest
from ft.onto.base_ontology import Token

from pos_tutorial.instances import TRAINING_DATA_FILE, read_instances
from pos_tutorial.pipeline import (
    build_model,
    build_training_data,
    evaluate_model,
    format_tagged,
    main,
    tag_text,
)

from conftest import read_pack


def test_build_training_data(treebank_dir, tmp_path):
    count = build_training_data(treebank_dir, str(tmp_path))

    assert count == 3
    instances = list(read_instances(str(tmp_path / TRAINING_DATA_FILE)))
    assert sorted(len(i.labels) for i in instances) == [6, 13, 18]


def test_build_and_evaluate_model(treebank_dir, tmp_path):
    model_path = build_model(treebank_dir, str(tmp_path), c1=0.0, max_iterations=100)

    result = evaluate_model(treebank_dir, model_path)
    assert result.total == 37
    assert result.accuracy > 0.9


def test_cli_build_and_evaluate(treebank_dir, tmp_path, caplog):
    main(["build", str(tmp_path), "--data-dir", treebank_dir, "--c1", "0", "--max-iterations", "50"])
    assert (tmp_path / "model.crfsuite").exists()

    with caplog.at_level(logging.INFO):
        main(["evaluate", str(tmp_path / "model.crfsuite"), "--data-dir", treebank_dir])
    assert "Accuracy" in caplog.text


def test_cli_needs_data():
    with pytest.raises(SystemExit):
        main(["build", "somewhere"])


def test_format_tagged():
    pack = read_pack([[("Hi", "UH"), ("there", "RB")], [("Bye", "UH")]])
    assert format_tagged(pack) == ["Hi[UH] there[RB]", "Bye[UH]"]


def test_tag_text(treebank_dir, tmp_path):
    pytest.importorskip("en_core_web_sm")
    model_path = build_model(treebank_dir, str(tmp_path), c1=0.0)

    pack = tag_text("The 3 cats were fed. Mr. Vinken is chairman.", model_path)

    tokens = list(pack.get(Token))
    assert tokens
    assert all(token.pos is not None for token in tokens)
