import asyncio
import logging
import sys
import threading

log = logging.getLogger()
banner_format = 'Watching file: {path} for new content...'


def setup_logging(is_debug):
    """
    Configure logging based on --debug in sys.argv
    :param is_debug:
    """
    root = logging.getLogger()
    [root.removeHandler(h) for h in root.handlers[:]]
    [root.removeFilter(f) for f in root.filters[:]]
    logging.basicConfig(
        format='[%(threadName)s][%(levelname)s] %(module)s:%(funcName)s:%('
               'lineno)s %(message)s',
        level=logging.DEBUG if is_debug else logging.INFO,
        stream=sys.stderr,
    )


def new_event_loop():
    loop = asyncio.new_event_loop()
    loop.set_exception_handler(exception_handler)
    return loop


def exception_handler(loop, ctx):
    """
    context is a dict object containing the following keys (new keys may be
            introduced in future Python versions):
    'message': Error message;
    'exception' (optional): Exception object;
    'future'    (optional): asyncio.Future instance;
    'task'      (optional): asyncio.Task instance;
    'handle'    (optional): asyncio.Handle instance;
    """
    log.error('Unhandled exception: %s', ctx['message'],
              exc_info=ctx.get('exception'))


def select_session(options, terminal, read=input):
    """resolve the file and color rules to tail from options and config"""
    from .cli import choose
    from .config import (
        parse_config_file, find_named, build_session, file_session,
    )

    config = parse_config_file(options.config)
    if options.file:
        return file_session(config, options.file)

    if options.app:
        app = find_named(config.applications, options.app, 'application')
    else:
        app = choose(terminal, 'Application',
                     [(a.name_view, a) for a in config.applications], read)
    if options.log:
        log_file = find_named(app.files, options.log, 'log')
    else:
        log_file = choose(terminal, 'Log',
                          [(f.name_view, f) for f in app.files], read)
    return build_session(config, app, log_file)


async def async_main(controller, cmdline=None):
    """
    async main runs the tail loop, the command line (if any) runs on its
    own daemon thread so a pending input() never blocks exit
    """
    if cmdline is not None:
        thread = threading.Thread(target=cmdline.loop, name='cli',
                                  daemon=True)
        thread.start()
    try:
        await controller.loop()
    finally:
        log.debug('close async loop')


def main(argv=None):
    setup_logging('--debug' in (sys.argv if argv is None else argv))

    from .cli import Terminal, ControlCli
    from .config import argv_parse
    from .engine import TailController, TailFileNotFound

    options = argv_parse(argv)
    setup_logging(options.debug)

    interactive = not options.no_input and sys.stdin.isatty()
    term = Terminal(prompt=None)
    try:
        session = select_session(options, term)
    except (ValueError, OSError) as e:
        log.error('%s', e)
        return 2
    log.debug('session %r', session)

    if interactive:
        term.prompt = '> '
    try:
        controller = TailController.open(
            session.path, session.rules, term.emit_line,
            interval=options.interval)
    except TailFileNotFound as e:
        sys.stderr.write('%s\n' % e)
        return 1

    cmdline = ControlCli(controller, term) if interactive else None
    term.set_title(session.title)
    term.clear(banner_format.format(path=session.path))

    loop = new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        loop.run_until_complete(async_main(controller, cmdline))
    except KeyboardInterrupt:
        controller.close()
    finally:
        loop.close()
        term.reset()
    return 0


def run():
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(130)
