import json

import pytest

from teamstock.config import DEFAULT_TEAMS, DefaultSettings, SystemConfig, load_system_config


def test_defaults():
    config = SystemConfig()
    assert config.teams == DEFAULT_TEAMS
    assert config.default_settings.currency == 'KSh'
    assert config.default_settings.reorder_point_multiplier == 0.2
    assert config.default_settings.min_stock_multiplier == 0.1
    assert config.default_settings.work_week_hours == 40


def test_with_and_without_option():
    config = SystemConfig()

    extended = config.with_option('locations', ' Hangar ')
    assert extended.locations[-1] == 'Hangar'
    assert 'Hangar' not in config.locations
    assert extended.with_option('locations', 'Hangar') is extended

    reduced = extended.without_option('locations', 'Hangar')
    assert reduced.locations == config.locations
    assert config.without_option('locations', 'Nowhere') is config


def test_option_errors():
    config = SystemConfig()
    with pytest.raises(ValueError):
        config.with_option('colours', 'red')
    with pytest.raises(ValueError):
        config.with_option('teams', '   ')
    with pytest.raises(ValueError):
        config.without_option('teams', config.default_settings.default_team)


def test_default_team_must_be_configured():
    with pytest.raises(ValueError):
        SystemConfig(teams=('Telemetry',))


def test_unknown_default_settings_are_ignored():
    settings = DefaultSettings.from_dict({'currency': 'USD', 'flux_capacitor': True})
    assert settings.currency == 'USD'


@pytest.mark.parametrize('hours', [0, -8, 'forty', True])
def test_work_week_hours_must_be_positive(hours):
    with pytest.raises(ValueError):
        DefaultSettings(work_week_hours=hours)
    with pytest.raises(ValueError):
        SystemConfig.from_dict({'default_settings': {'work_week_hours': hours}})


def test_load_system_config_from_file(tmp_path):
    path = tmp_path / 'system.json'
    path.write_text(json.dumps({
        'teams': ['Avionics', 'Payload'],
        'default_settings': {'currency': 'USD', 'work_week_hours': 35},
    }), encoding='utf-8')

    config = load_system_config(path)

    assert config.teams == ('Avionics', 'Payload')
    assert config.default_settings.work_week_hours == 35
    assert config.categories == SystemConfig().categories
    assert SystemConfig.from_dict(config.to_dict()) == config


def test_load_system_config_defaults(monkeypatch):
    monkeypatch.delenv('SYSTEM_CONFIG_PATH', raising=False)
    assert load_system_config() == SystemConfig()


def test_load_system_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_system_config(tmp_path / 'absent.json')
