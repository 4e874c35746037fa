from __future__ import annotations

import json
from pathlib import Path
import tempfile
import unittest

import aleph_elixir
from aleph_elixir.ast import App, Ident, Int, LetRec, Stmts
from aleph_elixir.main import compile_ast, compile_file


class IntegrationTests(unittest.TestCase):
    def test_compile_file_writes_output(self) -> None:
        tree = {
            'type': 'LetRec',
            'name': 'answer',
            'args': [],
            'body': {'type': 'Int', 'value': '42'},
        }
        with tempfile.TemporaryDirectory() as tmp:
            tree_path = Path(tmp) / 'answer.json'
            out_path = Path(tmp) / 'answer.ex'
            tree_path.write_text(json.dumps(tree), encoding='utf-8')
            artifacts = compile_file(tree_path, output_path=out_path)
            self.assertEqual(artifacts.code, 'def answer() do\n  42\nend')
            self.assertEqual(out_path.read_text(encoding='utf-8'), artifacts.code + '\n')
            self.assertEqual(artifacts.node_count, 2)

    def test_compile_ast_with_custom_indent(self) -> None:
        program = Stmts(LetRec('main', [], App(object_name='IO', fun=Ident('puts'), param_list=[Int('1')])), Ident('main'))
        artifacts = compile_ast(program, indent_unit='\t')
        self.assertEqual(artifacts.code, 'def main() do\n\tIO.puts(1)\nend\nmain')

    def test_package_level_entry_points(self) -> None:
        self.assertEqual(aleph_elixir.generate(Int('7')), '7')
        artifacts = aleph_elixir.compile_source('{"type": "Break"}')
        self.assertIsInstance(artifacts, aleph_elixir.CompileArtifacts)
        self.assertEqual(artifacts.code, 'throw(:break)')


if __name__ == '__main__':
    unittest.main()
