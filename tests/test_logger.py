import json
import logging

from spacevoxel.assets.content import ContentManager
from spacevoxel.engine.logger import DEFAULT_CHANNELS, MATERIALS, LoggerConfig, ProcgenLogger, channel_of, init_logger
from spacevoxel.materials.templates import TemplateDatabase
from spacevoxel.propulsion.generator import generate_nozzle


def test_settings_override_level_and_channels(tmp_path):
    settings = tmp_path / "settings.json"
    settings.write_text(json.dumps({"logLevel": "debug", "logChannels": {"mesh": True, "materials": False}}))
    config = LoggerConfig.from_settings(settings)
    assert config.level == logging.DEBUG
    assert config.channels["mesh"] is True
    assert config.channels["materials"] is False
    assert config.channels["propulsion"] is True


def test_missing_or_broken_settings_fall_back(tmp_path):
    missing = LoggerConfig.from_settings(tmp_path / "absent.json")
    assert missing.channels == DEFAULT_CHANNELS
    broken = tmp_path / "settings.json"
    broken.write_text("{oops")
    assert LoggerConfig.from_settings(broken).level == logging.INFO


def test_channel_gating(caplog):
    registry = ProcgenLogger(LoggerConfig(level=logging.DEBUG, channels=DEFAULT_CHANNELS.copy()))
    visuals = registry.channel("visuals")
    propulsion = registry.channel("propulsion")
    with caplog.at_level(logging.DEBUG, logger="spacevoxel"):
        visuals.info("hidden")
        propulsion.info("shown")
    messages = [record.getMessage() for record in caplog.records]
    assert "shown" in messages
    assert "hidden" not in messages


def test_unknown_channel_starts_disabled():
    registry = ProcgenLogger(LoggerConfig(channels={}))
    channel = registry.channel("audio")
    assert not channel.enabled
    registry.set_enabled("audio", True)
    assert channel.enabled
    assert "audio" in registry.channels()


def test_generator_reports_null_spec_on_channel(tmp_path, caplog):
    registry = init_logger(tmp_path / "settings.json")
    with caplog.at_level(logging.WARNING, logger="spacevoxel"):
        generate_nozzle(None, logger=registry)
    assert any(record.name == "spacevoxel.propulsion" for record in caplog.records)


def test_disabled_propulsion_channel_silences_generator(tmp_path, caplog):
    settings = tmp_path / "settings.json"
    settings.write_text(json.dumps({"logChannels": {"propulsion": False}}))
    registry = init_logger(settings)
    with caplog.at_level(logging.WARNING, logger="spacevoxel"):
        generate_nozzle(None, logger=registry)
    assert not caplog.records


def test_channel_of_without_registry():
    assert channel_of(None, MATERIALS) is None
    registry = ProcgenLogger(LoggerConfig())
    assert channel_of(registry, MATERIALS) is registry.channel(MATERIALS)


def test_template_warnings_use_materials_channel(tmp_path, caplog):
    bad = tmp_path / "broken.json"
    bad.write_text("{not json")
    database = TemplateDatabase()
    with caplog.at_level(logging.WARNING, logger="spacevoxel"):
        database.load(bad)
    assert [record.name for record in caplog.records] == ["spacevoxel.materials"]
    assert len(database) == 0


def test_content_manager_routes_load_warnings_through_registry(tmp_path, caplog):
    templates = tmp_path / "data" / "templates"
    planets = tmp_path / "data" / "planets"
    templates.mkdir(parents=True)
    planets.mkdir(parents=True)
    (templates / "metal.json").write_text(json.dumps([{"category": "Plasma"}]))
    (planets / "home.json").write_text(json.dumps([{"name": "No id"}]))

    registry = ProcgenLogger(LoggerConfig())
    content = ContentManager(tmp_path, logger=registry)
    assert content.templates.log is registry.channel(MATERIALS)
    with caplog.at_level(logging.WARNING, logger="spacevoxel"):
        content.load()
    materials = [record for record in caplog.records if record.name == "spacevoxel.materials"]
    assert len(materials) == 2

    registry.set_enabled(MATERIALS, False)
    caplog.clear()
    with caplog.at_level(logging.WARNING, logger="spacevoxel"):
        content.load()
    assert not caplog.records
