"""
CLI entry point, when used as a module: `python -m kubeshift`.
"""
from kubeshift import cli

if __name__ == '__main__':
    cli.main()
