from __future__ import annotations

import json
from pathlib import Path
import tempfile
import unittest

from aleph_elixir.ast import App, Bool, Bytes, Flag, Float, Ident, If, Int, Opaque, Put, Unit
from aleph_elixir.errors import AstDecodeError
from aleph_elixir.serialization import ast_from_dict, ast_from_json, ast_to_dict, read_ast, write_source


class DecodeTests(unittest.TestCase):
    def test_decode_nested_tree(self) -> None:
        payload = {
            'type': 'If',
            'condition': {'type': 'Bool', 'value': 'true'},
            'then': {'type': 'Int', 'value': '1'},
            'els': {'type': 'Unit'},
        }
        self.assertEqual(ast_from_dict(payload), If(Bool('true'), Int('1'), Unit()))

    def test_decode_scalars_from_json_types(self) -> None:
        node = ast_from_json('{"type": "Put", "array_name": "xs", "elem": {"type": "Int", "value": 0},'
                             ' "value": {"type": "Bool", "value": false}, "insert": true}')
        self.assertEqual(node, Put('xs', Int('0'), Bool('false'), insert=Flag.TRUE))

    def test_optional_fields_take_defaults(self) -> None:
        node = ast_from_dict({'type': 'App', 'fun': {'type': 'Ident', 'value': 'f'}})
        self.assertEqual(node, App(fun=Ident('f'), param_list=[], object_name=''))

    def test_unknown_type_becomes_opaque(self) -> None:
        node = ast_from_dict({'type': 'Lambda', 'args': ['x']})
        self.assertIsInstance(node, Opaque)
        self.assertEqual(node.type_name, 'Lambda')
        self.assertEqual(node.payload, {'args': ['x']})

    def test_bytes(self) -> None:
        self.assertEqual(ast_from_dict({'type': 'Bytes', 'elems': [0, 128]}), Bytes([0, 128]))

    def test_numeric_float_becomes_elixir_literal(self) -> None:
        cases = [
            ('1e20', '1.0e20'),
            ('1', '1.0'),
            ('2.5', '2.5'),
            ('1e-7', '1.0e-7'),
            ('"3.14"', '3.14'),
        ]
        for raw, expected in cases:
            with self.subTest(raw=raw):
                node = ast_from_json('{"type": "Float", "value": %s}' % raw)
                self.assertEqual(node, Float(expected))


class DecodeErrorTests(unittest.TestCase):
    def assertDecodeCode(self, code: str, payload: str) -> AstDecodeError:
        with self.assertRaises(AstDecodeError) as ctx:
            ast_from_json(payload)
        self.assertEqual(ctx.exception.code, code)
        return ctx.exception

    def test_invalid_json(self) -> None:
        err = self.assertDecodeCode('AST001', '{"type": ')
        self.assertTrue(err.path.startswith('<input>:1:'))

    def test_missing_type_tag(self) -> None:
        self.assertDecodeCode('AST002', '{"value": "1"}')
        self.assertDecodeCode('AST002', '[1, 2]')

    def test_missing_field_reports_path(self) -> None:
        err = self.assertDecodeCode('AST003', '{"type": "Neg", "expr": {"type": "Int"}}')
        self.assertEqual(err.path, '$.expr')

    def test_wrong_field_shape(self) -> None:
        err = self.assertDecodeCode('AST004', '{"type": "Array", "elems": {"type": "Int", "value": "1"}}')
        self.assertEqual(err.path, '$.elems')
        self.assertDecodeCode('AST004', '{"type": "Int", "value": [1]}')

    def test_byte_out_of_range(self) -> None:
        err = self.assertDecodeCode('AST005', '{"type": "Bytes", "elems": [1, 256]}')
        self.assertEqual(err.path, '$.elems[1]')

    def test_deeply_nested_tree_is_a_decode_error(self) -> None:
        depth = 3000
        link = '{"type": "Stmts", "expr1": {"type": "Int", "value": "0"}, "expr2": '
        payload = link * depth + '{"type": "Unit"}' + '}' * depth
        err = self.assertDecodeCode('AST006', payload)
        self.assertEqual(err.path, '<input>')

    def test_non_finite_float_is_rejected(self) -> None:
        self.assertDecodeCode('AST004', '{"type": "Float", "value": NaN}')
        self.assertDecodeCode('AST004', '{"type": "Float", "value": Infinity}')
        self.assertDecodeCode('AST004', '{"type": "Float", "value": true}')


class EncodeTests(unittest.TestCase):
    def test_encode_uses_type_tag_and_flag_text(self) -> None:
        payload = ast_to_dict(Put('xs', Int('0'), Int('9'), insert='true'))
        self.assertEqual(
            payload,
            {
                'type': 'Put',
                'array_name': 'xs',
                'elem': {'type': 'Int', 'value': '0'},
                'value': {'type': 'Int', 'value': '9'},
                'insert': 'true',
            },
        )

    def test_encode_opaque_keeps_unknown_fields(self) -> None:
        self.assertEqual(ast_to_dict(Opaque('Lambda', {'args': []})), {'type': 'Lambda', 'args': []})


class FileTests(unittest.TestCase):
    def test_read_ast_and_write_source(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            tree_path = Path(tmp) / 'tree.json'
            tree_path.write_text(json.dumps({'type': 'Ident', 'value': 'x'}), encoding='utf-8')
            self.assertEqual(read_ast(tree_path), Ident('x'))

            out_path = Path(tmp) / 'out.ex'
            write_source('x', out_path)
            self.assertEqual(out_path.read_text(encoding='utf-8'), 'x\n')


if __name__ == '__main__':
    unittest.main()
