"""Hosts resource for listing managed workspace entries."""

from brev_ssh.config.parser import ParseError, SSHConfigDocument
from brev_ssh.services.detector import managed_blocks
from brev_ssh.services.ports import ConfigIntegrityError, block_port
from brev_ssh.services.state import get_deps
from brev_ssh.utils.ping import ANY_ADDRESS, check_forwards


async def list_hosts_resource() -> str:
    """List managed workspace hosts with their local port and status.

    A host shows as "listening" when something accepts connections on its
    local port, which usually means the port forward is up.

    Returns:
        Formatted list of managed hosts, or an explanation if there are none.
    """
    deps = get_deps()
    config_path = deps.config.ssh_config_path
    key_path = deps.config.private_key_path

    if not deps.fs.exists(config_path):
        return f"No SSH config at {config_path}."

    try:
        document = SSHConfigDocument.load(deps.fs.read_text(config_path), source=config_path)
    except ParseError as e:
        return f"Error: {e}"

    entries: dict[str, tuple[str, int | None]] = {}
    for block in managed_blocks(document, key_path):
        hostname = block.get("Hostname") or ANY_ADDRESS
        try:
            port: int | None = block_port(block)
        except ConfigIntegrityError:
            port = None
        for pattern in block.patterns:
            entries.setdefault(pattern, (hostname, port))

    if not entries:
        return f"No Brev workspace hosts in {config_path}."

    forwards = {
        name: (hostname, port) for name, (hostname, port) in entries.items() if port is not None
    }
    listening = await check_forwards(forwards)

    lines = [f"Brev Workspace Hosts ({config_path})", "=" * 40, ""]
    for name, (hostname, port) in sorted(entries.items()):
        if port is None:
            lines.append(f"[?] {name} (invalid Port)")
            continue
        up = listening.get(name, False)
        status_icon = "✓" if up else "✗"
        lines.append(f"[{status_icon}] {name} ({'listening' if up else 'not listening'})")
        lines.append(f"    SSH:  ssh {name}")
        lines.append(f"    Port: {hostname}:{port}")
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"
