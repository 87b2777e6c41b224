"""
Configuration file processing, sys.argv processing, session resolution
"""

import argparse
import logging
import os

import yaml

from . import default_config_file
from .engine import default_interval
from .rules import ColorRuleSet, ConfigError
from .util import expand_path, join_path, replace_placeholders, build_repr

log = logging.getLogger()


def as_mapping(data, kind):
    """config section data, a ConfigError for scalars and lists"""
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError('%s must be a mapping, got %r' % (kind, data))
    return data


def as_list(data, kind):
    if not data:
        return []
    if not isinstance(data, list):
        raise ConfigError('%s must be a list, got %r' % (kind, data))
    return data


def as_name(value):
    """yaml reads names such as 2024 as numbers"""
    return value if value is None or isinstance(value, str) else str(value)


class LogFile:
    """one selectable log of an application"""

    def __init__(self, name_real, name_view=None):
        if not name_real:
            raise ConfigError('log file requires name_real')
        self.name_real = name_real
        self.name_view = name_view or name_real

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            raise ConfigError('log file must be a mapping, got %r' % (data,))
        return cls(as_name(data.get('name_real')),
                   as_name(data.get('name_view')))

    __repr__ = build_repr('LogFile', 'name_real', 'name_view')


class Application:
    """
    application section of the config file
    colors: True uses the global colors, a list its own, absent none
    """

    def __init__(self, name_real, name_view=None, folder='',
                 log_folder='', files=(), colors=None):
        if not name_real:
            raise ConfigError('application requires name_real')
        self.name_real = name_real
        self.name_view = name_view or name_real
        self.folder = folder or ''
        self.log_folder = log_folder or ''
        self.files = list(files)
        self.colors = colors

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            raise ConfigError('application must be a mapping, got %r'
                              % (data,))
        logs = as_mapping(data.get('logs'), 'logs')
        return cls(
            name_real=as_name(data.get('name_real')),
            name_view=as_name(data.get('name_view')),
            folder=as_name(data.get('folder')),
            log_folder=as_name(logs.get('folder')),
            files=[LogFile.from_dict(f)
                   for f in as_list(logs.get('files'), 'files')],
            colors=logs.get('colors'),
        )

    def color_entries(self, global_colors):
        """config entries of the color rules for this application"""
        if not self.colors:
            return []
        if self.colors is True:
            return global_colors or []
        return self.colors

    def log_path(self, log_file, today=None):
        name = replace_placeholders(log_file.name_real, today)
        return expand_path(join_path(
            self.folder, self.name_real, self.log_folder, name))

    def title(self, log_file, today=None):
        return '%s-%s' % (self.name_real,
                          replace_placeholders(log_file.name_real, today))

    __repr__ = build_repr('Application', 'name_real', 'name_view', 'folder')


class Config:
    def __init__(self, colors=(), applications=()):
        self.colors = list(colors)
        self.applications = list(applications)

    __repr__ = build_repr('Config', 'colors', 'applications')


class Session:
    """everything the tail engine needs: path, rules, title"""

    def __init__(self, path, rules, title=None):
        self.path = path
        self.rules = rules
        self.title = title or os.path.basename(path)

    __repr__ = build_repr('Session', 'path', 'title')


def parse_config(stream):
    """
    read yaml (or json) config, returns Config.
    Example -
    colors:
      - {keyword: ERROR, color: red, keep: true}
    applications:
      - name_real: billing
        folder: /srv/apps
        logs:
          folder: logs
          colors: true
          files:
            - {name_view: Today, name_real: 'billing-{date}.log'}
    """
    try:
        data = yaml.safe_load(stream)
    except yaml.YAMLError as e:
        raise ConfigError('config parse error: %s' % e)
    log.debug('parse_config(stream) => %r', data)
    if data is None:
        return Config()
    if not isinstance(data, dict):
        raise ConfigError('config must be a mapping, got %s'
                          % type(data).__name__)
    return Config(
        colors=as_list(data.get('colors'), 'colors'),
        applications=[Application.from_dict(a) for a in
                      as_list(data.get('applications'), 'applications')],
    )


def parse_config_file(config_file):
    """Reads config_file, an absent file is an empty config"""
    config_file = expand_path(config_file)
    if not os.path.isfile(config_file):
        log.debug('no config file %r', config_file)
        return Config()
    log.debug('parsing config %r', config_file)
    with open(config_file) as fh:
        return parse_config(fh)


def find_named(items, name, kind):
    """find item by name_real, then name_view"""
    for attr in ('name_real', 'name_view'):
        for item in items:
            if getattr(item, attr) == name:
                return item
    raise ConfigError('unknown %s %r' % (kind, name))


def build_session(config, app, log_file, today=None):
    rules = ColorRuleSet.from_config(app.color_entries(config.colors))
    return Session(app.log_path(log_file, today), rules,
                   app.title(log_file, today))


def file_session(config, path):
    """session for a file given on the command line, global colors"""
    path = os.path.abspath(expand_path(path))
    return Session(path, ColorRuleSet.from_config(config.colors))


def argv_parse(argv=None):
    class ConfigAction(argparse.Action):
        """Expand file path"""

        def __call__(self, p, namespace, values, option_string=None):
            setattr(namespace, self.dest, expand_path(values))

    # import the parent package high level description and version
    from . import __doc__ as desc
    from . import __version__ as version

    parser = argparse.ArgumentParser(description=desc)
    parser.add_argument(
        '--version', action='version', version='%(prog)s ' + version
    )
    parser.add_argument(
        '--debug', default=False, dest='debug', action='store_true',
        help='enable debug',
    )
    parser.add_argument(
        '--config', '-c',
        metavar='CFG', default=default_config_file, action=ConfigAction,
        help='configuration file, default %(default)s',
    )
    parser.add_argument(
        '-a', '--app', metavar='APP', default=None, dest='app',
        help='application from CFG, asked interactively when missing',
    )
    parser.add_argument(
        '-l', '--log', metavar='LOG', default=None, dest='log',
        help='log of APP, asked interactively when missing',
    )
    parser.add_argument(
        '-i', '--interval', metavar='SECONDS', default=default_interval,
        dest='interval', type=float,
        help='poll interval, default %(default)s',
    )
    parser.add_argument(
        '--no-input', default=False, dest='no_input', action='store_true',
        help='disable the clear/quit command prompt',
    )
    parser.add_argument(
        'file', metavar='FILE', nargs='?', default=None,
        help='tail FILE with the global colors instead of an application log',
    )

    options = parser.parse_args(argv)
    if options.interval <= 0:
        parser.error('interval must be positive')
    log.debug('final options %r', options)
    return options
