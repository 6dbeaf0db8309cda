#!/usr/bin/env python3

import argparse
import os
import sys

import yaml

from avsgen.avsgen_config import load_config
from avsgen.avsgen_errors import AvisynthError
from avsgen.avsgen_logging import configure_logging
from avsgen.avsgen_runtime import Environment
from avsgen.avsgen_signature import compile_signature

NAME = "avsgen"
VERSION = "0.1.0"
DESCRIPTION = "Generate AviSynth scripts from compact filter signatures."

EXIT_NOT_FOUND = 3
EXIT_INVALID = 4

# ============================================


def build_parser():
    """
    Build the command-line parser.
    """
    parser = argparse.ArgumentParser(prog=NAME, description=DESCRIPTION, add_help=False)
    parser.add_argument('-c', '--config', dest='config',
        help='YAML configuration file (defaults to $AVSGEN_CONFIG)')
    commands = parser.add_subparsers(dest='command')

    commands.add_parser('help', help='show this help and exit')
    commands.add_parser('version', help='show the version number and exit')

    describe = commands.add_parser('describe', help='compile a signature and print its parameters')
    describe.add_argument('signature', help='signature such as "Crop(ri:, ri:, ri:, ri:, b:align)"')
    describe.add_argument('types', nargs='?', help='comma-separated values for the t modifier')

    call = commands.add_parser('call', help='print the line a filter call generates')
    call.add_argument('name', help='filter name, case-insensitive')
    call.add_argument('args', nargs='*',
        help='arguments as YAML scalars (3, 1.5, true, clip, "text"); ~ omits one')

    render = commands.add_parser('render', help='build a script from a YAML list of steps')
    render.add_argument('file', help='YAML file of {Filter: [args]} steps')

    commands.add_parser('list', help='list the registered filters by category')
    return parser


def show_help(parser):
    print(f"{NAME} {VERSION}")
    print(DESCRIPTION + "\n")
    print(parser.format_help())
    return 0


# ============================================


def parse_scalar(text: str):
    """Read one command-line argument as a YAML scalar; ~ means omitted."""
    try:
        value = yaml.safe_load(text)
    except yaml.YAMLError:
        return text
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    return text


def describe_signature(signature_text, types=None):
    signature = compile_signature(signature_text, types=types)
    return {
        'name': signature.name,
        'params': [
            {
                'modifier': p.modifier,
                'identifier': p.identifier,
                'named': p.named,
                'kind': p.kind.value,
                'flags': p.flags.letters(),
            }
            for p in signature.params
        ],
        'types': list(signature.allowed_types),
    }


def read_steps(path):
    """
    Read a render file: a list of bare filter names or {Filter: args} mappings.
    """
    with open(path, encoding='utf-8') as f:
        steps = yaml.safe_load(f) or []
    if not isinstance(steps, list):
        raise AvisynthError(f"{path} must hold a list of steps")
    for step in steps:
        if isinstance(step, str):
            yield step, []
        elif isinstance(step, dict) and len(step) == 1:
            name, args = next(iter(step.items()))
            if args is None:
                args = []
            elif not isinstance(args, list):
                args = [args]
            yield str(name), args
        else:
            raise AvisynthError(f"bad step {step!r} in {path}")


def render_file(env, path):
    script = env.script()
    for name, args in read_steps(path):
        env.registry.resolve(name)
        getattr(script, name)(*args)
    return script.full_code()


def list_filters(env):
    lines = []
    for category, plugins in env.registry.categories().items():
        lines.append(f"{category or 'custom'}:")
        for plugin in plugins:
            lines.append(f"  {plugin.signature or plugin.name}")
    return "\n".join(lines)


# ============================================


def main(argv=None):
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        return e.code

    if args.command in (None, 'help'):
        return show_help(parser)
    if args.command == 'version':
        print(VERSION)
        return 0

    try:
        config = load_config(args.config)
        configure_logging(config.log_level, format_json=config.log_json)

        if args.command == 'describe':
            print(yaml.safe_dump(describe_signature(args.signature, args.types),
                                 sort_keys=False), end='')
            return 0

        env = Environment(config)
        if args.command == 'call':
            line = env.registry.resolve(args.name)(*[parse_scalar(a) for a in args.args])
            if line is not None:
                print(line)
        elif args.command == 'render':
            if not os.path.isfile(args.file):
                print(f'Script not found: "{args.file}"', file=sys.stderr)
                return EXIT_NOT_FOUND
            print(render_file(env, args.file), end='')
        elif args.command == 'list':
            print(list_filters(env))
    except AvisynthError as e:
        print(f"error: {e.message}", file=sys.stderr)
        return EXIT_INVALID
    return 0


if __name__ == '__main__':
    sys.exit(main())
