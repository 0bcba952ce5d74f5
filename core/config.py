import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Config:
    url: str = ""
    file: str = ""
    download: bool = False
    silent: bool = False
    proxy: str = ""
    fofa: bool = False
    shodan: bool = False

    @classmethod
    def from_args(cls, args):
        """Resolve parsed CLI arguments, falling back to the environment for the proxy."""
        proxy = args.proxy if args.proxy else os.getenv("IFAVICON_PROXY", "")
        return cls(
            url=args.url or "",
            file=args.file or "",
            download=bool(args.download),
            silent=bool(args.silent),
            proxy=proxy,
            fofa=bool(args.fofa),
            shodan=bool(args.shodan),
        )

    @property
    def is_empty(self):
        return not self.url and not self.file
