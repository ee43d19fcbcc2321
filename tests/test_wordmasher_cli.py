import logging
import re
import sys
from pathlib import Path

import pytest
import yaml

# Add repository root to path
sys.path.append(str(Path(__file__).resolve().parents[1]))
import wordmasher

WORDS = [
    "anchor", "basket", "candle", "dragon", "engine", "falcon", "garden", "hollow",
    "island", "jacket", "kettle", "lantern", "marble", "needle", "orchid", "pepper",
    "quartz", "rabbit", "saddle", "tunnel", "umbrella", "velvet", "walnut", "yellow",
    "zipper", "cactus", "dagger", "ember", "fossil", "glider", "hermit", "ivory",
    "jungle", "kitten", "locket", "magnet", "nectar", "oyster", "puzzle", "ripple",
]


@pytest.fixture(autouse=True)
def disable_tqdm(monkeypatch):
    """Replace tqdm with identity to avoid progress output during tests."""
    monkeypatch.setattr(wordmasher, "tqdm", lambda iterable, *_, **__: iterable)


@pytest.fixture
def word_file(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("\n".join(WORDS) + "\n")
    return path


@pytest.fixture
def special_file(tmp_path):
    path = tmp_path / "special.txt"
    path.write_text("!\n@\n#\n$\n%\n")
    return path


def run_main(monkeypatch, *args):
    monkeypatch.setattr(sys, 'argv', ['wordmasher.py', *args])
    wordmasher.main()


def test_main_writes_requested_count(monkeypatch, tmp_path, word_file):
    monkeypatch.chdir(tmp_path)
    output_file = tmp_path / "out.txt"
    run_main(monkeypatch, '-w', str(word_file), '-o', str(output_file), '-n', '10', '--no-log-file')

    lines = output_file.read_text().splitlines()
    assert len(lines) == 10
    assert all(line.strip() for line in lines)


def test_main_overwrites_existing_output(monkeypatch, tmp_path, word_file):
    monkeypatch.chdir(tmp_path)
    output_file = tmp_path / "out.txt"
    output_file.write_text("old\n" * 50)
    run_main(monkeypatch, '-w', str(word_file), '-o', str(output_file), '-n', '3', '--no-log-file')

    lines = output_file.read_text().splitlines()
    assert len(lines) == 3
    assert "old" not in lines


def test_main_prints_to_stdout(monkeypatch, tmp_path, word_file, capsys):
    monkeypatch.chdir(tmp_path)
    run_main(monkeypatch, '-w', str(word_file), '-o', '-', '-n', '5', '--no-log-file')

    assert len(capsys.readouterr().out.splitlines()) == 5


def test_main_seed_repeats_output(monkeypatch, tmp_path, word_file, special_file):
    monkeypatch.chdir(tmp_path)
    outputs = []
    for name in ("first.txt", "second.txt"):
        output_file = tmp_path / name
        run_main(
            monkeypatch,
            '-w', str(word_file), '-s', str(special_file), '-o', str(output_file),
            '-n', '12', '--split', '--seed', '1234', '--no-log-file',
        )
        outputs.append(output_file.read_text())
    assert outputs[0] == outputs[1]


def test_main_decorations_use_supplied_characters(monkeypatch, tmp_path, word_file, special_file):
    monkeypatch.chdir(tmp_path)
    output_file = tmp_path / "out.txt"
    run_main(
        monkeypatch,
        '-w', str(word_file), '-s', str(special_file), '-o', str(output_file),
        '-n', '13', '--split', '--seed', '5', '--no-log-file',
    )
    allowed = set("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ !@#$%")
    for line in output_file.read_text().splitlines():
        assert set(line) <= allowed


def test_main_no_special_characters_flag(monkeypatch, tmp_path, word_file, special_file):
    monkeypatch.chdir(tmp_path)
    output_file = tmp_path / "out.txt"
    run_main(
        monkeypatch,
        '-w', str(word_file), '-s', str(special_file), '-o', str(output_file),
        '-n', '13', '--no-special-characters', '--no-log-file',
    )
    assert all(line.isalpha() for line in output_file.read_text().splitlines())


@pytest.mark.parametrize("count", ["0", "1001", "-4", "ten"])
def test_main_rejects_bad_count(monkeypatch, tmp_path, word_file, count, caplog):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit):
        run_main(monkeypatch, '-w', str(word_file), '-o', 'out.txt', '-n', count, '--no-log-file')
    assert "'count'" in caplog.text


def test_main_accepts_count_bounds(monkeypatch, tmp_path, word_file):
    monkeypatch.chdir(tmp_path)
    run_main(monkeypatch, '-w', str(word_file), '-o', 'out.txt', '-n', '1', '--no-log-file')
    assert len((tmp_path / 'out.txt').read_text().splitlines()) == 1


def test_main_missing_required_field(monkeypatch, tmp_path, word_file, caplog):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit):
        run_main(monkeypatch, '-w', str(word_file), '-o', 'out.txt', '--no-log-file')
    assert "Missing required configuration field: 'count'" in caplog.text


def test_main_missing_word_file(monkeypatch, tmp_path, caplog):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit):
        run_main(monkeypatch, '-w', 'nope.txt', '-o', 'out.txt', '-n', '3', '--no-log-file')
    assert "File 'nope.txt' not found." in caplog.text


def test_main_empty_word_file(monkeypatch, tmp_path, caplog):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "empty.txt").write_text("\n\n")
    with pytest.raises(SystemExit):
        run_main(monkeypatch, '-w', 'empty.txt', '-o', 'out.txt', '-n', '3', '--no-log-file')
    assert "does not contain any words" in caplog.text


def test_main_missing_explicit_config(monkeypatch, tmp_path, caplog):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit):
        run_main(monkeypatch, '--config', 'custom.yaml')
    assert "Configuration file 'custom.yaml' not found." in caplog.text


def test_main_generation_failure_is_reported(monkeypatch, tmp_path, caplog):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "short.txt").write_text("ab\ncd\nef\n")
    with pytest.raises(SystemExit) as excinfo:
        run_main(monkeypatch, '-w', 'short.txt', '-o', 'out.txt', '-n', '2')
    assert excinfo.value.code == 1
    assert "Frankenword generation failed" in caplog.text
    assert "See '" in caplog.text
    assert not (tmp_path / 'out.txt').exists()


def test_main_uses_config_file(monkeypatch, tmp_path, word_file):
    monkeypatch.chdir(tmp_path)
    output_file = tmp_path / "from_config.txt"
    config = {
        'word_list_file': str(word_file),
        'output_file': str(output_file),
        'count': 4,
        'seed': 10,
        'logging': {'log_file': False},
    }
    (tmp_path / "wordmasher.yaml").write_text(yaml.dump(config))

    run_main(monkeypatch)
    assert len(output_file.read_text().splitlines()) == 4

    # Command-line values win over the config file
    run_main(monkeypatch, '-n', '7')
    assert len(output_file.read_text().splitlines()) == 7


def test_main_writes_session_log(monkeypatch, tmp_path, word_file):
    monkeypatch.chdir(tmp_path)
    root_level = logging.getLogger().level
    run_main(monkeypatch, '-w', str(word_file), '-o', 'out.txt', '-n', '2', '--log-dir', 'session-logs')

    log_files = list((tmp_path / 'session-logs').glob('*.txt'))
    assert len(log_files) == 1
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}\.txt", log_files[0].name)
    lines = log_files[0].read_text().splitlines()
    assert re.fullmatch(r"\d{2}:\d{2}:\d{2}:\d{3} New log started\.", lines[0])
    assert any("Loaded 40 words" in line for line in lines)
    # Debug entries reach the file at the default console level
    assert any(line.endswith("All program arguments validated.") for line in lines)
    assert any(" Selected [" in line for line in lines)
    assert any(" Mashed [" in line for line in lines)
    assert logging.getLogger().level == root_level
    # The handler is detached once main returns
    assert not any(
        Path(getattr(handler, 'baseFilename', '')).parent.name == 'session-logs'
        for handler in logging.getLogger().handlers
    )



def test_failed_run_log_holds_details(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "short.txt").write_text("ab\ncd\n")
    with pytest.raises(SystemExit):
        run_main(monkeypatch, '-w', 'short.txt', '-o', 'out.txt', '-n', '5')

    content = next((tmp_path / 'logs').glob('*.txt')).read_text()
    assert "New log started." in content
    assert "All program arguments validated." in content
    assert "Frankenword generation failed" in content


def test_unwritable_log_dir_continues(monkeypatch, tmp_path, word_file, caplog):
    monkeypatch.chdir(tmp_path)

    def refuse(*args, **kwargs):
        raise PermissionError("read-only")

    monkeypatch.setattr(wordmasher.logging, "FileHandler", refuse)
    run_main(monkeypatch, '-w', str(word_file), '-o', 'out.txt', '-n', '2', '--log-dir', 'session-logs')

    assert "Unable to open log file" in caplog.text
    assert len((tmp_path / 'out.txt').read_text().splitlines()) == 2


def test_main_no_log_file(monkeypatch, tmp_path, word_file):
    monkeypatch.chdir(tmp_path)
    run_main(monkeypatch, '-w', str(word_file), '-o', 'out.txt', '-n', '2', '--no-log-file')
    assert not (tmp_path / 'logs').exists()


def test_load_special_characters_skips_bad_lines(tmp_path, caplog):
    path = tmp_path / "special.txt"
    path.write_text("!\n\n??\n#\n \n\t\n")
    with caplog.at_level(logging.WARNING):
        characters = wordmasher.load_special_characters(str(path))
    assert characters == ["!", "#"]
    assert "Skipping line 3" in caplog.text
    # Whitespace is reserved for word splitting
    assert "Skipping line 5" in caplog.text
    assert "Skipping line 6" in caplog.text


def test_load_special_characters_empty_file_warns(tmp_path, caplog):
    path = tmp_path / "special.txt"
    path.write_text("\n")
    with caplog.at_level(logging.WARNING):
        assert wordmasher.load_special_characters(str(path)) == []
    assert "Special character injection is disabled" in caplog.text


def test_load_special_characters_none():
    assert wordmasher.load_special_characters(None) == []


def test_load_word_list_strips_and_skips_blank_lines(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("  apple \n\nbanana\ncherry\n")
    assert wordmasher.load_word_list(str(path)) == ["apple", "banana", "cherry"]


def test_parse_yaml_config_malformed(tmp_path):
    bad_file = tmp_path / 'bad.yaml'
    bad_file.write_text('count: [unclosed\n')
    with pytest.raises(SystemExit):
        wordmasher.parse_yaml_config(str(bad_file))


def test_parse_yaml_config_not_a_mapping(tmp_path):
    bad_file = tmp_path / 'list.yaml'
    bad_file.write_text('- a\n- b\n')
    with pytest.raises(SystemExit):
        wordmasher.parse_yaml_config(str(bad_file))


def test_extract_config_settings_defaults():
    config = {'word_list_file': 'w.txt', 'output_file': 'o.txt', 'count': '25'}
    wordmasher.validate_config(config)
    settings = wordmasher._extract_config_settings(config)

    assert settings.count == 25
    assert settings.seed is None
    assert settings.use_special_characters is True
    assert settings.split_words is False
    assert settings.weird_capitalization_odds == 11
    assert settings.retry_limit == 1000
    assert settings.log_file is True
    assert settings.log_dir == 'logs'


def test_extract_config_settings_invalid_odds(caplog):
    config = {'count': 5, 'decoration': {'weird_capitalization_odds': 101}}
    with pytest.raises(SystemExit):
        wordmasher._extract_config_settings(config)
    assert "'decoration.weird_capitalization_odds' must be between 1 and 100" in caplog.text


@pytest.mark.parametrize("count", [2.9, 0.5, "2.5"])
def test_extract_config_settings_rejects_fractional_count(count, caplog):
    with pytest.raises(SystemExit):
        wordmasher._extract_config_settings({'count': count})
    assert "Unable to parse 'count'" in caplog.text


def test_extract_config_settings_accepts_whole_float():
    assert wordmasher._extract_config_settings({'count': 3.0}).count == 3


def test_extract_config_settings_invalid_retry_limit():
    with pytest.raises(SystemExit):
        wordmasher._extract_config_settings({'count': 5, 'generation': {'retry_limit': 0}})


def test_merge_defaults_fills_empty_sections():
    config = {'decoration': None, 'generation': {'retry_limit': 50}}
    wordmasher._merge_defaults(config, wordmasher.DEFAULT_CONFIG)
    assert config['decoration']['weird_capitalization_odds'] == 11
    assert config['generation']['retry_limit'] == 50
    assert config['logging'] == {'log_file': True, 'log_dir': 'logs'}


def test_merge_defaults_rejects_non_mapping():
    with pytest.raises(SystemExit):
        wordmasher._merge_defaults({'decoration': 'fancy'}, wordmasher.DEFAULT_CONFIG)


def test_minimal_formatter():
    formatter = wordmasher.MinimalFormatter()
    info = logging.LogRecord('test', logging.INFO, __file__, 1, 'hello', None, None)
    warning = logging.LogRecord('test', logging.WARNING, __file__, 1, 'careful', None, None)
    assert formatter.format(info) == 'hello'
    assert formatter.format(warning) == 'WARNING: careful'
