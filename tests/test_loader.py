# tests/test_loader.py - Tests for the template loader
"""
Unit tests for TemplateLoader.
"""

from pathlib import Path

import jinja2
import pytest
from template_profiler.loader import TemplateLoader, TemplateNotFound


@pytest.fixture
def templates_dir(tmp_path):
    (tmp_path / 'main').mkdir()
    (tmp_path / 'main' / 'layout.html').write_text('layout')
    (tmp_path / 'main' / 'partials').mkdir()
    (tmp_path / 'main' / 'partials' / 'item.html').write_text('item')
    (tmp_path / 'override').mkdir()
    (tmp_path / 'override' / 'layout.html').write_text('override')
    (tmp_path / 'admin').mkdir()
    (tmp_path / 'admin' / 'dashboard.html').write_text('dashboard')
    (tmp_path / 'secret.txt').write_text('secret')
    return tmp_path


class TestTemplateLoader:
    """Test cases for TemplateLoader"""

    def test_resolve(self, templates_dir):
        """Test a name resolves to the absolute source path"""
        loader = TemplateLoader(str(templates_dir / 'main'))

        path = loader.resolve('partials/item.html')

        assert Path(path).is_absolute()
        assert Path(path) == (templates_dir / 'main' / 'partials' / 'item.html').resolve()

    def test_first_path_wins(self, templates_dir):
        """Test search directories are tried in order"""
        loader = TemplateLoader([str(templates_dir / 'override'), str(templates_dir / 'main')])
        assert Path(loader.resolve('layout.html')).parent.name == 'override'

    def test_missing_template(self, templates_dir):
        """Test an unknown name raises TemplateNotFound"""
        loader = TemplateLoader(str(templates_dir / 'main'))

        with pytest.raises(TemplateNotFound) as exc_info:
            loader.resolve('missing.html')
        assert exc_info.value.name == 'missing.html'
        assert not loader.exists('missing.html')

    @pytest.mark.parametrize('name', ['../secret.txt', 'partials/../../secret.txt', '/etc/passwd', ''])
    def test_names_outside_search_paths(self, templates_dir, name):
        """Test names escaping the search directories are rejected"""
        loader = TemplateLoader(str(templates_dir / 'main'))

        with pytest.raises(TemplateNotFound):
            loader.resolve(name)

    def test_namespaces(self, templates_dir):
        """Test '@namespace/name' uses the namespace's directories"""
        loader = TemplateLoader(str(templates_dir / 'main'), {'admin': [str(templates_dir / 'admin')]})

        assert loader.exists('@admin/dashboard.html')
        assert not loader.exists('dashboard.html')
        assert loader.get_namespaces() == ['admin']

    def test_unknown_namespace(self, templates_dir):
        """Test a namespace without paths raises TemplateNotFound"""
        loader = TemplateLoader(str(templates_dir / 'main'))

        with pytest.raises(TemplateNotFound):
            loader.resolve('@shop/cart.html')
        with pytest.raises(TemplateNotFound):
            loader.resolve('@shop')

    def test_add_path(self, templates_dir):
        """Test directories can be appended after construction"""
        loader = TemplateLoader()
        assert not loader.exists('layout.html')

        loader.add_path(str(templates_dir / 'main'))

        assert loader.exists('layout.html')

    def test_namespace_and_main_paths_together(self, templates_dir):
        """Test namespaced and plain names resolve through the same loader"""
        loader = TemplateLoader(str(templates_dir / 'main'), {'admin': [str(templates_dir / 'admin')]})

        assert Path(loader.resolve('@admin/dashboard.html')).parent.name == 'admin'
        assert Path(loader.resolve('layout.html')).parent.name == 'main'

    def test_engine_not_found_is_translated(self, templates_dir):
        """Test the engine's lookup error surfaces as TemplateNotFound"""
        loader = TemplateLoader(str(templates_dir / 'main'))

        with pytest.raises(TemplateNotFound) as exc_info:
            loader.resolve('nope.html')
        assert isinstance(exc_info.value.__cause__, jinja2.TemplateNotFound)
