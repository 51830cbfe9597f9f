"""

Command line utility to generate JSON and XML sample values from JSON Schema and OpenAPI schemas.

"""


import argparse
import json
import sys

from samplize import _version
from samplize.common import MISSING
from samplize.config import SampleConfig
from samplize.schema_loader import load_schema
from samplize.schema_sampler import create_xml_example, sample_from_schema


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with one subcommand per output mode."""
    parser = argparse.ArgumentParser(description='Generate sample values from JSON Schema and OpenAPI schemas.')
    parser.add_argument('--version', action='store_true', help='Print the version of samplize.')
    subparsers = parser.add_subparsers(dest='command')
    for command, description in (('json', 'Generate a JSON sample'), ('xml', 'Generate an XML sample')):
        cmd_parser = subparsers.add_parser(command, help=description)
        cmd_parser.add_argument('input', type=str, help='Path or URL of the schema document, optionally with a #/json/pointer fragment.')
        cmd_parser.add_argument('--pointer', type=str, default=None, help='JSON Pointer to the schema inside the document.')
        cmd_parser.add_argument('--example', type=str, default=None, help='JSON literal to use instead of the schema\'s own example.')
        cmd_parser.add_argument('--include-read-only', dest='include_read_only', action='store_true', help='Include readOnly properties.')
        cmd_parser.add_argument('--include-write-only', dest='include_write_only', action='store_true', help='Include writeOnly properties.')
        cmd_parser.add_argument('--out', type=str, default=None, help='Output file. Writes to stdout if omitted.')
    return parser


def generate(command: str, input_path: str, pointer: str | None = None, example: str | None = None, include_read_only: bool = False, include_write_only: bool = False) -> str:
    """
    Generate the sample for a schema document and return it as text.

    Args:
        command: ``'json'`` or ``'xml'``.
        input_path: Path or URL of the schema document.
        pointer: JSON Pointer to the schema inside the document.
        example: JSON text of a literal override.
        include_read_only: Include readOnly properties.
        include_write_only: Include writeOnly properties.
    """
    schema = load_schema(input_path, pointer)
    config = SampleConfig(include_read_only=include_read_only, include_write_only=include_write_only)
    override = MISSING if example is None else json.loads(example)
    if command == 'xml':
        return create_xml_example(schema, config, override) or ''
    return json.dumps(sample_from_schema(schema, config, override), indent=2, ensure_ascii=False)


def main():
    """Main function for the command line utility."""
    parser = create_parser()
    args = parser.parse_args()

    if getattr(args, 'version', False):
        print(f'samplize {_version.version}')
        return

    if getattr(args, 'command', None) is None:
        parser.print_help()
        return

    try:
        output = generate(
            args.command,
            args.input,
            pointer=getattr(args, 'pointer', None),
            example=getattr(args, 'example', None),
            include_read_only=getattr(args, 'include_read_only', False),
            include_write_only=getattr(args, 'include_write_only', False),
        )
        out = getattr(args, 'out', None)
        if out:
            with open(out, 'w', encoding='utf-8') as f:
                f.write(output)
        else:
            sys.stdout.write(output + '\n')
    except Exception as e:  # pylint: disable=broad-except
        print("Error: ", str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
