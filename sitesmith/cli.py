import sys

from .build import build_site
from .config import get_config_path_from_args, load_config
from .errors import SiteBuildError


def main(argv=None):
    if argv is None:
        argv = sys.argv

    try:
        cfg = load_config(get_config_path_from_args(argv))
        print(f"Building {cfg['source']} into {cfg['destination']}...\n")
        summary = build_site(
            cfg["source"],
            cfg["destination"],
            cfg["layouts"],
            cfg["posts"],
            template_extensions=cfg["template_extensions"],
            markdown_extension=cfg["markdown_extension"],
            default_layout=cfg["default_layout"],
            workers=cfg["workers"],
        )
    except SiteBuildError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)

    print(
        f"\n✓ Built {summary['documents']} document(s) "
        f"({summary['posts']} post(s)), copied {summary['copied']} file(s)"
    )


if __name__ == "__main__":
    main()
