"""
CLI command implementations for the mesh policy index.

Each command takes parsed arguments and returns a process exit code.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Iterator

import yaml

from meshindex.config import ConfigError, IndexConfig, load_config_from_env
from meshindex.index import (
    DefaultPolicy,
    InvalidDefaultPolicyError,
    Meta,
    PortSetParseError,
    format_portset,
    parse_portset,
    tcp_port_names,
)
from meshindex.models import ManifestError, pod_metadata_from_manifest, pod_spec_from_manifest


def _load_manifests(path: str) -> Iterator[dict[str, Any]]:
    """Yield every object in a (multi-document) YAML file, expanding Lists."""
    if path == "-":
        documents = list(yaml.safe_load_all(sys.stdin))
    else:
        with open(path, "r", encoding="utf-8") as f:
            documents = list(yaml.safe_load_all(f))

    for doc in documents:
        if not isinstance(doc, dict):
            continue
        if doc.get("kind") == "List":
            for item in doc.get("items") or []:
                if isinstance(item, dict):
                    yield item
        else:
            yield doc


def _object_ref(manifest: dict[str, Any]) -> str:
    meta = manifest.get("metadata") or {}
    name = meta.get("name", "<unnamed>")
    namespace = meta.get("namespace")
    ref = f"{namespace}/{name}" if namespace else name
    return f"{manifest.get('kind', '?')}/{ref}"


def _resolve_config(args: argparse.Namespace) -> IndexConfig:
    if getattr(args, "config", None):
        config = IndexConfig.from_file(args.config)
    else:
        config = load_config_from_env()

    policy = getattr(args, "default_policy", None)
    if policy:
        try:
            config.cluster_default_policy = DefaultPolicy.parse(policy)
        except InvalidDefaultPolicyError as e:
            raise ConfigError(str(e)) from e
    return config


def cmd_ports(args: argparse.Namespace) -> int:
    """Parse a port specification and print the resulting ports."""
    try:
        ports = parse_portset(args.spec)
    except PortSetParseError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps({"ports": sorted(ports), "count": len(ports)}))
    elif ports:
        print(format_portset(ports))
    return 0


def cmd_settings(args: argparse.Namespace) -> int:
    """Print the settings derived from each object in a manifest file."""
    try:
        config = _resolve_config(args)
        manifests = list(_load_manifests(args.manifest))
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (OSError, yaml.YAMLError) as e:
        print(f"Error: cannot load {args.manifest}: {e}", file=sys.stderr)
        return 1

    results = []
    for manifest in manifests:
        meta = Meta.from_metadata(pod_metadata_from_manifest(manifest))
        effective = meta.settings.effective_default_policy(config.cluster_default_policy)
        results.append({
            "object": _object_ref(manifest),
            "labels": meta.labels,
            "settings": meta.settings.to_dict(),
            "effective_default_policy": effective.value,
        })

    if args.json:
        print(json.dumps(results, indent=2))
        return 0

    for result in results:
        settings = result["settings"]
        print(result["object"])
        print(f"  default policy:     {result['effective_default_policy']}"
              + ("" if settings["default_policy"] else " (cluster default)"))
        print(f"  opaque ports:       {format_portset(set(settings['opaque_ports'])) or '-'}")
        print(f"  require identity:   {format_portset(set(settings['require_id_ports'])) or '-'}")
    return 0


def cmd_port_names(args: argparse.Namespace) -> int:
    """Print the named TCP container ports of each workload in a manifest file."""
    try:
        manifests = list(_load_manifests(args.manifest))
    except (OSError, yaml.YAMLError) as e:
        print(f"Error: cannot load {args.manifest}: {e}", file=sys.stderr)
        return 1

    results = []
    for manifest in manifests:
        try:
            spec = pod_spec_from_manifest(manifest)
        except ManifestError as e:
            print(f"Error: {_object_ref(manifest)}: {e}", file=sys.stderr)
            return 1
        if spec is None:
            continue
        names = tcp_port_names(spec)
        results.append({
            "object": _object_ref(manifest),
            "port_names": {name: sorted(ports) for name, ports in sorted(names.items())},
        })

    if args.json:
        print(json.dumps(results, indent=2))
        return 0

    for result in results:
        print(result["object"])
        if not result["port_names"]:
            print("  (no named TCP ports)")
        for name, ports in result["port_names"].items():
            print(f"  {name}: {format_portset(set(ports))}")
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    """Show the effective index configuration."""
    try:
        config = _resolve_config(args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(config.to_json())
    else:
        for key, value in config.to_dict().items():
            print(f"{key}: {value}")
    return 0
