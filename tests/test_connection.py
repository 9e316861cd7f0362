import asyncio

import pytest

from went.errors.internal import TransportClosed, TransportFault
from went.irc.connection import IRCConnection


@pytest.mark.asyncio
async def test_register_and_read_lines():
    received: list[str] = []

    async def handle(reader, writer):
        for _ in range(2):
            received.append((await reader.readline()).decode())
        writer.write(b":srv 001 bob :Welcome\r\n")
        await writer.drain()
        writer.close()

    server = await asyncio.start_server(handle, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    conn = IRCConnection("127.0.0.1", port)
    try:
        await conn.open()
        assert conn.is_open
        await conn.register("bob")
        assert await conn.read_line() == ":srv 001 bob :Welcome"
        with pytest.raises(TransportClosed):
            await conn.read_line()
        assert received == ["NICK bob\r\n", "USER bob 8 * :bob\r\n"]
    finally:
        await conn.close()
        server.close()
        await server.wait_closed()
    assert not conn.is_open
    with pytest.raises(TransportFault):
        await conn.send_line("PING :after-close")


@pytest.mark.asyncio
async def test_invalid_utf8_is_replaced():
    async def handle(reader, writer):
        writer.write(b":srv NOTICE * :caf\xe9\r\n")
        await writer.drain()
        writer.close()

    server = await asyncio.start_server(handle, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    conn = IRCConnection("127.0.0.1", port)
    try:
        await conn.open()
        assert await conn.read_line() == ":srv NOTICE * :caf\ufffd"
    finally:
        await conn.close()
        server.close()
        await server.wait_closed()


@pytest.mark.asyncio
async def test_refused_connection_is_transport_fault():
    server = await asyncio.start_server(lambda r, w: None, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    server.close()
    await server.wait_closed()
    with pytest.raises(TransportFault) as exc:
        await IRCConnection("127.0.0.1", port).open()
    assert exc.value.data == {"host": "127.0.0.1", "port": port}


@pytest.mark.asyncio
async def test_use_before_open_is_fault():
    conn = IRCConnection("irc.test", 6667)
    with pytest.raises(TransportFault):
        await conn.send_line("PING :x")
    with pytest.raises(TransportFault):
        await conn.read_line()
    await conn.close()
