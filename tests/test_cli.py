# Copyright 2025 Vijaykumar Singh <singhvjd@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Tests for the command-line front end."""

import json

import pytest

from treeq.cli import build_parser, main

HELLO_GO = "package main\n\nimport \"fmt\"\n\nfunc Hello() {\n\tfmt.Println(\"hi\")\n}\n"


@pytest.fixture
def hello(write_file):
    return write_file("hello.go", HELLO_GO)


class TestParser:
    def test_query_source_is_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["query", "-q", "(x)", "--query-file", "q.scm"])

    def test_refs_context_default_on(self):
        args = build_parser().parse_args(["refs", "-s", "Foo"])
        assert args.include_context is True
        args = build_parser().parse_args(["refs", "-s", "Foo", "--no-context"])
        assert args.include_context is False


class TestMain:
    def test_symbols(self, hello, capsys):
        assert main(["symbols", "-f", str(hello), "--compact"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data == [
            {
                "file": "hello.go",
                "symbols": [
                    {
                        "name": "Hello",
                        "kind": "function",
                        "visibility": "public",
                        "file": "hello.go",
                        "range": {
                            "start": {"line": 5, "column": 6},
                            "end": {"line": 5, "column": 11},
                        },
                        "signature": "func Hello ()",
                    }
                ],
            }
        ]

    def test_outline(self, hello, capsys):
        assert main(["outline", "-f", str(hello)]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["package"] == "main"
        assert data["imports"] == [{"path": "fmt"}]
        assert [s["name"] for s in data["symbols"]] == ["Hello"]

    def test_refs(self, hello, capsys):
        assert main(["refs", "-s", "Println", "-f", str(hello)]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["symbol"] == "Println"
        [ref] = data["references"]
        assert ref["kind"] == "call"
        assert ref["context"] == 'fmt.Println("hi")'

    def test_query_file(self, hello, tmp_path, capsys):
        query_file = tmp_path / "q.scm"
        query_file.write_text("(package_clause (package_identifier) @pkg)", encoding="utf-8")

        assert main(["query", "--query-file", str(query_file), "-f", str(hello)]) == 0

        [match] = json.loads(capsys.readouterr().out)
        assert match["file"] == "hello.go"
        assert match["captures"][0]["name"] == "pkg"
        assert match["captures"][0]["text"] == "main"

    def test_error_goes_to_stderr(self, tmp_path, capsys):
        assert main(["query", "-q", "(broken", "--path", str(tmp_path)]) == 1

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "compile query" in json.loads(captured.err)["error"]

    def test_missing_outline_file(self, tmp_path, capsys):
        assert main(["outline", "-f", str(tmp_path / "gone.go")]) == 1
        assert "error" in json.loads(capsys.readouterr().err)

    def test_example_queries(self, capsys):
        assert main(["example-queries"]) == 0

        out = capsys.readouterr().out
        lines = out.splitlines()
        assert "# func: all function names" in lines
        index = lines.index("# func: all function names")
        assert lines[index + 1] == "(function_declaration name: (identifier) @name)"

    def test_example_queries_unknown_language(self, capsys):
        assert main(["example-queries", "--language", "cobol"]) == 1
        assert "unsupported language" in json.loads(capsys.readouterr().err)["error"]
