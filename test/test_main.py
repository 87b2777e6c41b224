from textwrap import dedent

import pytest

from tailtint import main as tailtint_main
from tailtint.cli import Terminal
from tailtint.config import argv_parse
from tailtint.rules import ConfigError

config = dedent("""
colors:
  - {{keyword: ERROR, color: red, keep: true}}
applications:
  - name_view: Billing
    name_real: billing
    folder: {folder}
    logs:
      folder: logs
      colors: true
      files:
        - {{name_view: Main, name_real: main.log}}
        - {{name_view: Audit, name_real: audit.log}}
""")


@pytest.fixture(autouse=True)
def keep_logging(monkeypatch):
    # main() would point the root logger at the captured stderr
    monkeypatch.setattr(tailtint_main, 'setup_logging', lambda debug: None)


@pytest.fixture
def config_file(tmp_path):
    (tmp_path / 'billing' / 'logs').mkdir(parents=True)
    (tmp_path / 'billing' / 'logs' / 'main.log').write_text('old\n')
    cfg = tmp_path / 'cfg.yml'
    cfg.write_text(config.format(folder=tmp_path))
    return str(cfg)


def test_select_session_by_name(config_file, tmp_path):
    options = argv_parse(['-c', config_file, '-a', 'Billing', '-l', 'main.log'])
    session = tailtint_main.select_session(options, Terminal(prompt=None))
    assert session.path == str(tmp_path / 'billing' / 'logs' / 'main.log')
    assert session.title == 'billing-main.log'
    assert len(session.rules) == 1


def test_select_session_menu(config_file, capsys):
    options = argv_parse(['-c', config_file])
    answers = iter(['2'])
    session = tailtint_main.select_session(
        options, Terminal(prompt=None), read=lambda prompt: next(answers))
    assert session.path.endswith('/billing/logs/audit.log')
    assert 'Audit' in capsys.readouterr().out


def test_select_session_unknown_log(config_file):
    options = argv_parse(['-c', config_file, '-a', 'billing', '-l', 'x'])
    with pytest.raises(ConfigError):
        tailtint_main.select_session(options, Terminal(prompt=None))


def test_main_missing_file(tmp_path, capsys):
    missing = str(tmp_path / 'missing.log')
    assert tailtint_main.main(['--no-input', '-c', str(tmp_path / 'none'),
                               missing]) == 1
    assert missing in capsys.readouterr().err


def test_main_config_error(tmp_path):
    cfg = tmp_path / 'bad.yml'
    cfg.write_text('colors: [{color: red}]\napplications: []\n')
    log_file = tmp_path / 'a.log'
    log_file.write_text('')
    assert tailtint_main.main(['--no-input', '-c', str(cfg),
                               str(log_file)]) == 2


def test_main_runs_until_closed(config_file, monkeypatch, capsys):
    seen = {}

    async def fake_async_main(controller, cmdline=None):
        seen['cmdline'] = cmdline
        seen['path'] = controller.state.path
        controller.close()

    monkeypatch.setattr(tailtint_main, 'async_main', fake_async_main)
    assert tailtint_main.main(['--no-input', '-c', config_file,
                               '-a', 'billing', '-l', 'Main']) == 0
    out = capsys.readouterr().out
    assert seen['cmdline'] is None
    assert seen['path'].endswith('/billing/logs/main.log')
    assert '\x1b]0;billing-main.log\x07' in out
    assert 'Watching file: %s for new content...' % seen['path'] in out
    assert out.endswith('\x1b[39;49;00m\n')


@pytest.mark.parametrize('colors', [
    'colors: [{keyword: ERROR, keep: "false"}]\n',
    'colors: [ERROR]\n',
    'applications: [billing]\n',
])
def test_main_bad_entries_exit_2(tmp_path, colors):
    cfg = tmp_path / 'bad.yml'
    cfg.write_text(colors)
    log_file = tmp_path / 'a.log'
    log_file.write_text('')
    assert tailtint_main.main(['--no-input', '-c', str(cfg),
                               str(log_file)]) == 2


def test_main_numeric_keyword(tmp_path, monkeypatch, capsys):
    cfg = tmp_path / 'cfg.yml'
    cfg.write_text('colors: [{keyword: 404, color: red}]\n')
    log_file = tmp_path / 'a.log'
    log_file.write_text('')
    seen = {}

    async def fake_async_main(controller, cmdline=None):
        seen['keywords'] = [r.keyword for r in controller.colorizer.rules]
        controller.close()

    monkeypatch.setattr(tailtint_main, 'async_main', fake_async_main)
    assert tailtint_main.main(['--no-input', '-c', str(cfg),
                               str(log_file)]) == 0
    assert seen['keywords'] == ['404']
