"""
Tests for configuration loading, validation and the executor factory.
"""

from pathlib import Path

import pytest
import yaml

from stagedeploy.config import ConfigError, load_settings, settings_from_config, validate_config
from stagedeploy.deployment.utils import deep_merge, load_config
from stagedeploy.executors import (
    get_tools, missing_commands,
    ZipCommandArchiver, UnzipCommandExtractor, ChownCommandOwnershipSetter,
    ZipfileArchiver, ZipfileExtractor, ShutilOwnershipSetter
)

REPO_CONFIG = Path(__file__).parent.parent / "config" / "deployment-config.yaml"


def _config(**deployment):
    base = {
        'deployment': {'staging_dir': '/srv/staging'},
        'targets': [
            {'name': 'Site', 'mode': 'bundle', 'destination': '/var/www/site', 'owner': 'www-data:www-data'},
            {'name': 'WAR', 'mode': 'archive', 'destination': '/opt/tomcat/webapps', 'owner': 'tomcat:tomcat'},
        ],
    }
    base['deployment'].update(deployment)
    return base


class TestSettings:

    def test_defaults(self):
        settings = settings_from_config(_config())

        assert settings.staging_dir == Path('/srv/staging')
        assert settings.extract_dir == Path('/srv/staging')
        assert settings.extract_path == Path('/srv/staging/build')
        assert settings.max_backups == 3
        assert settings.tool_mode == 'command'
        assert [t.mode for t in settings.targets] == ['bundle', 'archive']
        assert settings.targets[0].owner_user == 'www-data'

    def test_overrides(self):
        settings = settings_from_config(_config(
            extract_dir='/srv/extract', build_dir_name='dist', max_backups=5, tool_mode='python'
        ))

        assert settings.extract_path == Path('/srv/extract/dist')
        assert settings.max_backups == 5
        assert settings.tool_mode == 'python'

    def test_settings_are_immutable(self):
        settings = settings_from_config(_config())
        with pytest.raises(AttributeError):
            settings.max_backups = 10

    def test_repository_config_is_valid(self):
        settings = load_settings(REPO_CONFIG)
        assert len(settings.targets) == 4
        assert settings.targets[3].mode == 'archive'


class TestValidation:

    @pytest.mark.parametrize("mutate, fragment", [
        (lambda c: c['deployment'].update(max_backups=0), 'max_backups'),
        (lambda c: c['deployment'].update(tool_mode='tar'), 'tool_mode'),
        (lambda c: c['targets'][0].update(mode='rsync'), 'mode'),
        (lambda c: c['targets'][0].pop('owner'), 'owner'),
        (lambda c: c['targets'][0].update(owner='a:b:c'), 'owner'),
        (lambda c: c.update(targets=[]), 'targets'),
    ])
    def test_invalid(self, mutate, fragment):
        config = _config()
        mutate(config)

        is_valid, errors = validate_config(config)

        assert not is_valid
        assert any(fragment in e for e in errors)

    def test_empty(self):
        assert validate_config(None) == (False, ["Configuration is empty"])

    def test_duplicate_names(self):
        config = _config()
        config['targets'][1]['name'] = 'Site'

        is_valid, errors = validate_config(config)

        assert not is_valid
        assert errors == ["Duplicate target name: Site"]

    def test_invalid_config_raises(self):
        with pytest.raises(ConfigError) as exc:
            settings_from_config(_config(max_backups=-1))
        assert exc.value.errors


class TestLoadConfig:

    def test_deep_merge(self):
        merged = deep_merge({'a': {'x': 1, 'y': 2}, 'b': [1]}, {'a': {'y': 3}, 'b': [2]})
        assert merged == {'a': {'x': 1, 'y': 3}, 'b': [2]}

    def test_local_override(self, tmp_path, monkeypatch):
        base = tmp_path / "deployment-config.yaml"
        base.write_text(yaml.dump(_config()))
        (tmp_path / "deployment-config.local.yaml").write_text(
            yaml.dump({'deployment': {'max_backups': 1}})
        )

        monkeypatch.delenv('DEPLOYMENT_ENV', raising=False)
        assert 'max_backups' not in load_config(base)['deployment']

        monkeypatch.setenv('DEPLOYMENT_ENV', 'local')
        merged = load_config(base)
        assert merged['deployment'] == {'staging_dir': '/srv/staging', 'max_backups': 1}

    def test_config_path_from_environment(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.yaml"
        path.write_text(yaml.dump(_config(max_backups=7)))
        monkeypatch.setenv('DEPLOYMENT_CONFIG', str(path))
        monkeypatch.delenv('DEPLOYMENT_ENV', raising=False)

        assert load_settings().max_backups == 7

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_settings(tmp_path / "absent.yaml")

    def test_yaml_syntax_error(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("deployment: [unclosed\n")
        with pytest.raises(ConfigError, match="Error loading configuration"):
            load_settings(path)


class TestExecutorFactory:

    def test_command_mode(self):
        tools = get_tools(settings_from_config(_config()))
        assert isinstance(tools.archiver, ZipCommandArchiver)
        assert isinstance(tools.extractor, UnzipCommandExtractor)
        assert isinstance(tools.owner, ChownCommandOwnershipSetter)

    def test_python_mode(self):
        tools = get_tools(settings_from_config(_config(tool_mode='python')))
        assert isinstance(tools.archiver, ZipfileArchiver)
        assert isinstance(tools.extractor, ZipfileExtractor)
        assert isinstance(tools.owner, ShutilOwnershipSetter)

    def test_missing_commands(self):
        settings = settings_from_config(_config())
        assert missing_commands(settings, which=lambda cmd: None) == ['zip', 'unzip']
        assert missing_commands(settings, which=lambda cmd: f"/usr/bin/{cmd}") == []
        assert missing_commands(settings, which=lambda cmd: None if cmd == 'unzip' else cmd) == ['unzip']

    def test_python_mode_needs_no_commands(self):
        settings = settings_from_config(_config(tool_mode='python'))
        assert missing_commands(settings, which=lambda cmd: None) == []
