from __future__ import annotations

import json
import unittest

from aleph_elixir.errors import PluginError
from aleph_elixir.expanders.elixir_backend import ElixirBackend
from aleph_elixir.main import build_plugin_manager, compile_source
from aleph_elixir.plugin import PluginManager, load_plugin_spec


TREE = '{"type": "Put", "array_name": "xs", "elem": {"type": "Int", "value": "0"}, "value": {"type": "Int", "value": "9"}, "insert": "yes"}'


class PluginTests(unittest.TestCase):
    def test_default_manager_has_elixir(self) -> None:
        manager = build_plugin_manager()
        self.assertEqual(manager.available_backends(), ['elixir'])
        self.assertIsInstance(manager.get_backend('elixir'), ElixirBackend)

    def test_json_backend_plugin_register(self) -> None:
        manager = build_plugin_manager(['aleph_elixir.plugins.json_backend:register'])
        self.assertEqual(manager.available_backends(), ['elixir', 'json'])
        artifacts = compile_source(TREE, target='json', plugin_manager=manager)
        payload = json.loads(artifacts.code)
        self.assertEqual(payload['type'], 'Put')
        self.assertEqual(payload['insert'], 'false')

    def test_module_spec_implies_register(self) -> None:
        manager = build_plugin_manager(['aleph_elixir.plugins.json_backend'])
        self.assertIn('json', manager.available_backends())

    def test_empty_symbol_means_register(self) -> None:
        manager = PluginManager()
        load_plugin_spec(manager, 'aleph_elixir.plugins.json_backend:')
        self.assertEqual(manager.available_backends(), ['json'])

    def test_backend_class_is_not_an_export(self) -> None:
        with self.assertRaises(PluginError) as ctx:
            load_plugin_spec(PluginManager(), 'aleph_elixir.plugins.json_backend:JsonBackend')
        self.assertEqual(ctx.exception.code, 'PLG006')

    def test_register_into_empty_manager(self) -> None:
        manager = PluginManager()
        load_plugin_spec(manager, 'aleph_elixir.plugins.json_backend:register')
        self.assertEqual(manager.available_backends(), ['json'])

    def test_unknown_target(self) -> None:
        with self.assertRaises(PluginError) as ctx:
            compile_source(TREE, target='erlang')
        self.assertEqual(ctx.exception.code, 'PLG001')
        self.assertIn('elixir', ctx.exception.hint)

    def test_bad_specs(self) -> None:
        cases = [
            ('', 'PLG004'),
            ('aleph_elixir.plugins.no_such_module', 'PLG005'),
            ('aleph_elixir.plugins.json_backend:missing', 'PLG003'),
            ('aleph_elixir.main:DEFAULT_TARGET', 'PLG006'),
        ]
        for spec, code in cases:
            with self.subTest(spec=spec):
                with self.assertRaises(PluginError) as ctx:
                    load_plugin_spec(PluginManager(), spec)
                self.assertEqual(ctx.exception.code, code)


if __name__ == '__main__':
    unittest.main()
