#!/usr/bin/env python3
"""
Basic usage example for the ConfTree module.
"""
from dataclasses import dataclass, field
from typing import List

from ConfTree import new_config_data
from ConfTree.utils import format_json

DOCUMENT = b"""
{
    "appname": "inventory",
    "server": {"host": "${SERVER_HOST||0.0.0.0}", "port": 8080, "debug": "off"},
    "database": {
        "dsn": "postgresql://localhost/inventory",
        "pool": {"size": 10, "timeout": 2.5},
        "replicas": ["db-1", "db-2"]
    },
    "origins": "https://a.example;https://b.example"
}
"""


@dataclass
class Pool:
    size: int = 1
    timeout: float = 1.0


@dataclass
class Database:
    dsn: str = ""
    pool: Pool = field(default_factory=Pool)
    replicas: List[str] = field(default_factory=list)


def main():
    """Main function."""
    config = new_config_data("json", DOCUMENT)

    print("Typed accessors:")
    print("  server::host  =", config.get_string("server::host"))
    print("  server::port  =", config.get_int("server::port"))
    print("  server::debug =", config.get_bool("server::debug"))
    print("  origins       =", config.get_strings("origins"))
    print("  workers       =", config.default_int("server::workers", 4))

    print("\nDatabase section as its own container:")
    database = config.sub("database")
    print("  pool::size =", database.get_int("pool::size"))

    print("\nDatabase section decoded onto a dataclass:")
    print(" ", config.unmarshal("database", Database))

    config.set("environment", "staging")
    print("\nSerialized document:")
    print(format_json(config.get_all()))


if __name__ == "__main__":
    main()
