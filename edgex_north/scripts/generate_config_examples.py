import argparse
import os

import yaml

from edgex_north import plugin


def write_config_examples(output_dir: str) -> list:
    """
    Write the example and help configuration files of the plugin to output_dir.

    Returns:
        list: paths of the written files
    """
    output_dir = os.path.abspath(output_dir)
    os.makedirs(output_dir, exist_ok=True)

    config_example_pretty = yaml.dump(plugin.CONFIG_EXAMPLE, sort_keys=False)
    config_help_pretty = yaml.dump(plugin.CONFIG_HELP, sort_keys=False)

    example_file = os.path.join(output_dir, "edgex.yaml")
    help_file = os.path.join(output_dir, "edgex_help.yaml")

    with open(example_file, "w") as file:
        file.write(config_example_pretty)
    with open(help_file, "w") as file:
        file.write(config_help_pretty)

    return [example_file, help_file]


if __name__ == "__main__":

    # INPUT ARGUMENTS
    # =======================================================

    example_usage = """
    Example usage:
    $ python -m edgex_north.scripts.generate_config_examples --output_dir ./examples/configs
    """

    parser = argparse.ArgumentParser(
        description="Generate configuration example files for the EdgeX north plugin.",
        epilog=example_usage,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        "--output_dir",
        "-o",
        type=str,
        default="examples/configs",
        help="Directory to save the generated configuration example files.",
    )

    args = parser.parse_args()

    for path in write_config_examples(args.output_dir):
        print(f"Configuration example written to {path}")
