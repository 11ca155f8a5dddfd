# cubeserver

A library of the pieces a block-game server is made of, written for
protocol version 578 (game release 1.15.2).

## What is in it

- `cubeserver.buffer` – `Buffer`, which reads and writes the wire types:
  big-endian integers and floats, VarInts and VarLongs, length-prefixed
  strings and byte arrays, UUIDs, packed block positions and NBT compounds.
  Reads past the end yield zero bytes; over-long VarInts raise `ValueError`.
- `cubeserver.nbt` – NBT tag types (`NbtByte`, `NbtString`, `NbtList`,
  `NbtCompound`, `NbtLongArray` and the rest) and `new_tag(tag_type)`.
- `cubeserver.serverbound` – the packets a client sends, each with
  `pull(reader)`; `packet_for(packet_id, state)` returns a fresh packet for a
  connection state, or `None`.
- `cubeserver.clientbound` – the packets sent to a client, each with
  `push(writer)` and a `packet_id`.
- `cubeserver.states` – `PacketState` (`SHAKE`, `STATUS`, `LOGIN`, `PLAY`)
  and the `SystemCommand`/`SystemMessage` control values.
- `cubeserver.connection` – `Connection`, wrapping a socket with AES/CFB8
  encryption (from `cubeserver.cfb8`) and zlib compression;
  `frame_packet(packet)` builds a length-prefixed frame.
- `cubeserver.auth` – the server RSA key pair (`new_crypt`, `encrypt`,
  `decrypt`), the signed SHA-1 join hash (`auth_hash`), the session lookup
  address (`auth_url`), `parse_auth` for the reply, and `run_auth_get`, which
  performs the lookup on a background thread and hands the result to a
  callback.
- `cubeserver.level` – `Level`, `Chunk`, sixteen-block `Slice` and `Block`,
  stored in bit-packed `Compacter` arrays (`cubeserver.compact`), plus
  `gen_super_flat` for a flat test world.
- `cubeserver.plugin` – plugin-channel messages (`Brand`, `DebugPaths`,
  `DebugNeighbors`) and `message_for_channel`.
- `cubeserver.clientdata` – client settings and flag sets: `PlayerAbilities`,
  `SkinParts`, `Relativity`, `PlayerInfoAddPlayer` and their enums.
- `cubeserver.game` – versions, difficulties, game modes, level types,
  profiles, positions and rotations, and the tick constants `TPS` and `MPT`.
- `cubeserver.chat`, `cubeserver.messages` – `&`-style colour codes,
  ANSI console colouring (`translate_console`) and JSON chat components
  (`Message`).
- `cubeserver.tasking` – `Tasking`, running repeating and delayed tasks
  measured in ticks (`every`, `after`) or in `timedelta` units
  (`every_time`, `after_time`). `load()` starts a background thread;
  `process(now_ms)` runs whatever is due at a given millisecond time, which
  makes scheduling easy to drive by hand.
- `cubeserver.commands` – `CommandManager`, a case-insensitive command
  registry, and `SimpleCommand`.
- `cubeserver.logs` – `Logging`, levelled and coloured log output, and
  `format_time` for durations in words.
- `cubeserver.funcs`, `cubeserver.uuids`, `cubeserver.masking` – small
  helpers: Java-style string hashes, UUID halves, bit flags.

## Examples

Reading back what was written:

```python
from cubeserver.buffer import Buffer

buf = Buffer(b"")
buf.push_varint(300)
buf.push_text("hello")

assert buf.pull_varint() == 300
assert buf.pull_text() == "hello"
```

Picking an incoming packet:

```python
from cubeserver.buffer import Buffer
from cubeserver.serverbound import packet_for
from cubeserver.states import PacketState

data = Buffer()
data.push_i64(42)

packet = packet_for(0x01, PacketState.STATUS)
packet.pull(data)
assert packet.ping == 42
```

Translating colour codes:

```python
from cubeserver.chat import translate

assert translate("&ahello") == "§ahello"
```

Bit-packed storage:

```python
from cubeserver.compact import Compacter

values = Compacter(14, 4096)
values.set(10, 1234)
assert values.get(10) == 1234
```

A flat test world:

```python
from cubeserver.level import Level, gen_super_flat

level = Level("test")
gen_super_flat(level, 6)
assert len(level.chunks()) == 144
```

Commands:

```python
from cubeserver.commands import CommandManager

manager = CommandManager()
manager.register("vers", lambda sender, params: print("0.0.1-SNAPSHOT"))
command = manager.search("VERS")
command.evaluate(None, [])
```

## What it does not do

This is a library, not a running server. It has no command to start, does
not listen for connections, and does not wire the packets together into a
handshake, login and play sequence. There is no event publish/subscribe hub,
no interactive console, no player entities kept per connection, and worlds
live only in memory: nothing is saved to or loaded from disk.

## Tests

The test suite uses pytest; install it with the `test` extra and run
`pytest`.