"""
Tests for the configuration, pipeline and command line.
"""

import json

import pandas as pd
import pytest
from pydantic import ValidationError

from mmseg import DecodingError, Dictionary
from mmseg.cli import main
from mmseg.config import Config, SegmentationConfig
from mmseg.pipeline import SegmentationPipeline

CLASSIC_WORDS = ["研究", "研究生", "生命", "命", "的", "起源"]


@pytest.fixture
def text_input(tmp_path):
    path = tmp_path / "input.txt"
    path.write_text("研究生命的起源\n\nhello 世界\n", encoding="utf-8")
    return path


class TestConfig:
    """Tests for configuration models."""

    def test_defaults(self):
        config = Config()
        assert config.input_file is None
        assert config.input_format == "text"
        assert config.segmentation.mode == "complex"
        assert config.segmentation.keep_separators is True
        assert config.segmentation.workers == 1
        assert config.output.format == "text"
        assert config.dictionary.max_word_length is None

    def test_validation(self):
        with pytest.raises(ValidationError):
            SegmentationConfig(workers=0)
        with pytest.raises(ValidationError):
            SegmentationConfig(mode="fast")
        with pytest.raises(ValidationError):
            Config(dictionary={"max_word_length": 0})

    def test_yaml_round_trip(self, tmp_path):
        config = Config(
            input_file="corpus.txt",
            dictionary={"words_file": "words.dic", "max_word_length": 4},
            segmentation={"mode": "simple", "workers": 2},
            output={"format": "csv", "output_file": "out.csv"},
        )
        path = tmp_path / "config.yaml"
        config.to_yaml(path)
        loaded = Config.from_yaml(path)
        assert loaded == config
        assert loaded.input_file.name == "corpus.txt"


class TestPipeline:
    """Tests for the file pipeline."""

    def make_pipeline(self, tmp_path, input_file, **overrides):
        config = Config(input_file=input_file, output={"output_file": tmp_path / "out" / "result"})
        for section, values in overrides.items():
            for key, value in values.items():
                setattr(getattr(config, section), key, value)
        return SegmentationPipeline(config, dictionary=Dictionary(CLASSIC_WORDS))

    def test_text_output(self, tmp_path, text_input):
        pipeline = self.make_pipeline(
            tmp_path, text_input, segmentation={"keep_separators": False}
        )
        assert pipeline.run() == 2
        lines = (tmp_path / "out" / "result").read_text(encoding="utf-8").splitlines()
        assert lines == ["研究 生命 的 起源", "hello 世 界"]

    def test_jsonl_input_and_output(self, tmp_path):
        input_file = tmp_path / "input.jsonl"
        records = [
            json.dumps({"text": "研究生命"}, ensure_ascii=False),
            json.dumps({"content": "起源"}, ensure_ascii=False),
            "not json",
            "[1, 2]",
            json.dumps("研究"),
            json.dumps({"text": 42}),
            json.dumps({"other": 1}),
        ]
        input_file.write_text("\n".join(records) + "\n", encoding="utf-8")

        pipeline = self.make_pipeline(tmp_path, input_file, output={"format": "jsonl"})
        pipeline.config.input_format = "jsonl"
        assert pipeline.run() == 2

        output = [
            json.loads(line)
            for line in (tmp_path / "out" / "result").read_text(encoding="utf-8").splitlines()
        ]
        assert output == [
            {
                "line": 1,
                "tokens": [
                    {"text": "研究", "start": 0, "end": 2},
                    {"text": "生命", "start": 2, "end": 4},
                ],
            },
            {"line": 2, "tokens": [{"text": "起源", "start": 0, "end": 2}]},
        ]

    def test_csv_output(self, tmp_path, text_input):
        pipeline = self.make_pipeline(tmp_path, text_input, output={"format": "csv"})
        pipeline.run()
        df = pd.read_csv(tmp_path / "out" / "result", keep_default_na=False)
        assert list(df.columns) == [
            "Source_Line_Number",
            "Token_Order",
            "Token",
            "Start_Index",
            "End_Index",
            "Kind",
        ]
        first_line = df[df["Source_Line_Number"] == 1]
        assert first_line["Token"].tolist() == ["研究", "生命", "的", "起源"]
        third_line = df[df["Source_Line_Number"] == 3]
        assert third_line["Token"].tolist() == ["hello", " ", "世", "界"]
        assert third_line["Kind"].tolist() == ["letter", "whitespace", "cjk", "cjk"]

    def test_parallel_matches_sequential(self, tmp_path):
        input_file = tmp_path / "input.txt"
        input_file.write_text("研究生命的起源\n研究生\n生命起源123\n" * 5, encoding="utf-8")

        sequential = self.make_pipeline(tmp_path, input_file)
        sequential.config.output.output_file = tmp_path / "sequential.txt"
        parallel = self.make_pipeline(tmp_path, input_file, segmentation={"workers": 2})
        parallel.config.output.output_file = tmp_path / "parallel.txt"

        assert sequential.run() == parallel.run() == 15
        assert (tmp_path / "sequential.txt").read_text(encoding="utf-8") == (
            tmp_path / "parallel.txt"
        ).read_text(encoding="utf-8")

    def test_invalid_encoding_in_input(self, tmp_path):
        input_file = tmp_path / "input.txt"
        input_file.write_bytes("研究\n".encode("utf-8") + b"\xff\xfe\n")
        pipeline = self.make_pipeline(tmp_path, input_file)
        with pytest.raises(DecodingError, match=":2:"):
            pipeline.run()

    def test_missing_input(self, tmp_path):
        pipeline = self.make_pipeline(tmp_path, tmp_path / "missing.txt")
        with pytest.raises(FileNotFoundError):
            pipeline.run()

        pipeline.config.input_file = None
        with pytest.raises(ValueError):
            pipeline.run()

    def test_loads_configured_dictionary(self, tmp_path, text_input, word_list_file):
        config = Config(
            input_file=text_input,
            dictionary={"word_list_files": [word_list_file]},
            output={"output_file": tmp_path / "out.txt", "delimiter": "/"},
        )
        SegmentationPipeline(config).run()
        first = (tmp_path / "out.txt").read_text(encoding="utf-8").splitlines()[0]
        assert first == "研究/生命/的/起源"


class TestCli:
    """Tests for the command-line entry point."""

    def test_cut(self, capsys, word_list_file):
        assert main(["cut", "研究生命的起源", "--word-list", str(word_list_file)]) == 0
        assert capsys.readouterr().out.strip() == "研究 / 生命 / 的 / 起源"

    def test_cut_undecodable_argument(self, capsys, word_list_file):
        assert main(["cut", "研究\udcff", "--word-list", str(word_list_file)]) == 1
        assert "Error" in capsys.readouterr().err

    def test_segment_skips_non_object_jsonl(self, tmp_path, word_list_file):
        input_file = tmp_path / "input.jsonl"
        input_file.write_text('{"text": "研究"}\n[1, 2]\n"abc"\n', encoding="utf-8")
        output = tmp_path / "tokens.txt"
        args = [
            "segment",
            "--input",
            str(input_file),
            "--input-format",
            "jsonl",
            "--output",
            str(output),
            "--word-list",
            str(word_list_file),
        ]
        assert main(args) == 0
        assert output.read_text(encoding="utf-8").splitlines() == ["研究"]

    def test_cut_simple_mode(self, capsys, word_list_file):
        args = ["cut", "研究生命的起源", "--word-list", str(word_list_file), "--mode", "simple"]
        assert main(args) == 0
        assert capsys.readouterr().out.strip() == "研究生 / 命 / 的 / 起源"

    def test_segment(self, tmp_path, text_input, word_list_file):
        output = tmp_path / "tokens.jsonl"
        args = [
            "segment",
            "--input",
            str(text_input),
            "--output",
            str(output),
            "--format",
            "jsonl",
            "--word-list",
            str(word_list_file),
        ]
        assert main(args) == 0
        assert len(output.read_text(encoding="utf-8").splitlines()) == 2

    def test_segment_with_config(self, tmp_path, text_input, word_list_file):
        config = Config(
            input_file=text_input,
            dictionary={"word_list_files": [word_list_file]},
            output={"output_file": tmp_path / "out.txt"},
        )
        config_path = tmp_path / "config.yaml"
        config.to_yaml(config_path)
        assert main(["segment", "--config", str(config_path), "--drop-separators"]) == 0
        lines = (tmp_path / "out.txt").read_text(encoding="utf-8").splitlines()
        assert lines == ["研究 生命 的 起源", "hello 世 界"]

    def test_segment_errors(self, tmp_path, capsys):
        assert main(["segment"]) == 1
        assert main(["segment", "--input", str(tmp_path / "missing.txt")]) == 1
        assert main(["segment", "--input", "x.txt", "--workers", "0"]) == 1
        assert "Error" in capsys.readouterr().err

    def test_no_command(self):
        assert main([]) == 1
