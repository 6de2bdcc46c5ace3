"""
Raw network printer transport.

Sends a finished command stream to a network label printer on its raw print
port (9100 by default). The device is addressed either by hostname/IP or by
the UNC path of its print queue (`\\\\server\\printer`), in which case the
queue name is used as the hostname.

All failures are returned as PrintResult values with a PrintError kind:
- HOST_NOT_FOUND: the name does not resolve
- TIMEOUT: no connection within the connect timeout
- UNREACHABLE: the connection was refused or the host is unroutable
- WRITE_FAILED: the connection dropped while writing copies

Example:
    result = await label_print("zebra-dock-3", 2, "^XA^FDHello^FS^XZ")
"""

import asyncio
import socket
from labelprep.config.settings import appsettings
from labelprep.lib.log import LOG
from labelprep.models.dataModel import PrintResult, PrintError


def printer_hostExtract(device_address: str) -> str:
    """Derive the network host name from a device address.

    Args:
        device_address: Hostname, IP address, or UNC queue path

    Returns:
        The host name to resolve
    """
    address: str = device_address.strip()
    if address.startswith("\\\\"):
        parts: list[str] = address.split("\\")
        if len(parts) > 3 and parts[3]:
            return parts[3]
        return parts[2] if len(parts) > 2 else ""
    return address


async def printer_resolve(host: str, port: int) -> str | PrintResult:
    """Resolve a host name to its first stream-capable address.

    Args:
        host: Host name or IP address
        port: Port the address will be used with

    Returns:
        Either:
            - str: The resolved IP address
            - PrintResult: HOST_NOT_FOUND failure
    """
    if not host:
        return PrintResult(
            success=False,
            error=PrintError.HOST_NOT_FOUND,
            message="Printer address is empty.",
        )

    loop = asyncio.get_running_loop()
    try:
        infos = await loop.getaddrinfo(host, port, type=socket.SOCK_STREAM)
    except socket.gaierror as e:
        msg: str = f"Printer '{host}' IP address not found: {e}"
        LOG(msg)
        return PrintResult(success=False, error=PrintError.HOST_NOT_FOUND, message=msg)

    if not infos:
        msg = f"Printer '{host}' IP address not found."
        LOG(msg)
        return PrintResult(success=False, error=PrintError.HOST_NOT_FOUND, message=msg)

    address: str = infos[0][4][0]
    LOG(f"Printer '{host}' resolved to {address}")
    return address


async def printer_connect(
    address: str, port: int, timeout: float
) -> tuple[asyncio.StreamReader, asyncio.StreamWriter] | PrintResult:
    """Open a stream connection to the printer.

    A successful connect doubles as the reachability check.

    Args:
        address: Resolved printer address
        port: Raw print port
        timeout: Seconds to wait for the connection

    Returns:
        Either:
            - (reader, writer): The open stream pair
            - PrintResult: TIMEOUT or UNREACHABLE failure
    """
    try:
        return await asyncio.wait_for(
            asyncio.open_connection(address, port), timeout=timeout
        )
    except asyncio.TimeoutError:
        msg: str = f"Timeout: Unable to connect to printer at {address}:{port}."
        LOG(msg)
        return PrintResult(success=False, error=PrintError.TIMEOUT, message=msg)
    except OSError as e:
        msg = f"Printer at {address}:{port} is not reachable: {e}"
        LOG(msg)
        return PrintResult(success=False, error=PrintError.UNREACHABLE, message=msg)


async def label_print(
    device_address: str,
    repeat_count: int,
    command_stream: str,
    port: int | None = None,
    timeout: float | None = None,
) -> PrintResult:
    """Send a command stream to a network printer `repeat_count` times.

    Args:
        device_address: Hostname, IP address, or UNC queue path
        repeat_count: Number of copies to write
        command_stream: Final command stream
        port: Raw print port, defaults to `appsettings.printerPort`
        timeout: Connect timeout, defaults to `appsettings.connectTimeout`

    Returns:
        PrintResult with the number of copies written
    """
    port = port if port is not None else appsettings.printerPort
    timeout = timeout if timeout is not None else appsettings.connectTimeout

    if repeat_count < 1:
        LOG(f"Nothing to print for '{device_address}' (repeat count {repeat_count})")
        return PrintResult(success=True, copies_sent=0)

    host: str = printer_hostExtract(device_address)
    resolved: str | PrintResult = await printer_resolve(host, port)
    if isinstance(resolved, PrintResult):
        return resolved

    connection = await printer_connect(resolved, port, timeout)
    if isinstance(connection, PrintResult):
        return connection
    _, writer = connection

    payload: bytes = command_stream.encode(appsettings.encoding)
    copies_sent: int = 0
    try:
        for _ in range(repeat_count):
            writer.write(payload)
            await writer.drain()
            copies_sent += 1
    except OSError as e:
        msg: str = (
            f"Write to printer '{host}' failed after {copies_sent} of "
            f"{repeat_count} copies: {e}"
        )
        LOG(msg)
        return PrintResult(
            success=False,
            error=PrintError.WRITE_FAILED,
            message=msg,
            copies_sent=copies_sent,
        )
    finally:
        writer.close()
        try:
            await writer.wait_closed()
        except OSError as e:
            LOG(f"Error closing printer connection: {e}")

    LOG(f"Sent {copies_sent} copies to '{host}' ({resolved}:{port})")
    return PrintResult(success=True, copies_sent=copies_sent)
