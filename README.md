# mwmud

A small multi-user dungeon in pure Python. It has three parts:

- **`mwmud.server`**: a dedicated chat server. Clients connect over TCP,
  log in with a name and exchange chat messages. Lines that start with `/`
  are commands.
- **`mwmud.client`**: the client core. It holds an event dispatcher, chat
  commands, a chat box model, the menu screens, a network connection and the
  game state. Drawing is recorded on a `Canvas`.
- **`mwmud.editor`**: campaign tools. They create and open campaign
  directories. They also load and save the grouping tree for areas as JSON.

The package needs only the standard library at run time.

## Installing

```
pip install .
```

To install the test dependencies as well:

```
pip install ".[test]"
```

## Running the server

```
mwmud-server [--host HOST] [--port PORT]
```

By default the server listens on all interfaces on TCP port 25565. About
every 20 ms it delivers queued events, accepts a waiting client and reads
what the clients have sent. It does not limit the number of clients.

Stop the server with Ctrl+C. It then asks you to press ENTER, tells every
client "Server is shutting down." and closes all connections. If the port
cannot be bound, the command prints an error and exits with status 1.

### Wire format

Every message is sent as one packet. A packet starts with a 4-byte big-endian
payload length, followed by the payload. The payload starts with a 4-byte
big-endian byte count, followed by the UTF-8 text. Use
`mwmud.packet.encode_packet(message)` to build a packet. Use
`mwmud.packet.PacketReader().feed(data)` to turn received bytes into a list of
completed messages. A malformed payload raises `mwmud.packet.PacketError`.

### Server commands

| Command         | Effect                                                                 |
|-----------------|------------------------------------------------------------------------|
| `/login <name>` | Log in under a name. Everyone is told "<name> has logged in."          |
| `/logout`       | Log out. If you are not logged in, the server says so.                 |
| `/disconnect`   | Leave the server. You are logged out first.                            |
| `/ping`         | Accepted, but the server does nothing and sends no reply.              |

A logged-in client's plain text is broadcast to everyone as `name: text`. A
client that is not logged in gets a reply telling it to use `/login` first.
If `/login` has no name, the client gets `SERVER: usage: /login <name>`. The
server ignores any other `/` command.

The pieces can also be used directly. `mwmud.server.dispatcher.Dispatcher`
queues the events in `mwmud.server.events`. `mwmud.server.parser.CommandParser`
routes a message, and `mwmud.server.network.ServerNetwork` ties them together
(`start()`, `poll()`, `cleanup()`).

## Using the client core

`mwmud.client.game.Game(dispatcher=None)` starts on the title screen. Each
frame, do the following:

1. Queue key presses with
   `game.dispatcher.enqueue(InputEvent(EventType.INPUT_KEYPRESSED, key))`.
   Typed characters are passed as one-character strings. Control keys are
   members of `mwmud.client.events.Key` (`RETURN`, `BACK`, `ESCAPE`, `UP`,
   `DOWN`, ...).
2. Call `game.update()`. It delivers queued events and reads from the server.
3. Call `game.render(canvas)` with a `mwmud.client.ui.Canvas`. The canvas
   keeps a list of `FillOp` and `TextOp` entries in `canvas.operations`.

The screens, in order:

- **Title**: ENTER opens the main menu.
- **Main menu**: "Join Game" and "Exit". Move with UP and DOWN, choose with
  ENTER. ESCAPE goes back.
- **Connect**: type the server address, press DOWN to reach "Join", then
  press ENTER. The client connects on port 25565 with a 3-second timeout. If
  the connection fails, the screen shows the failure message.
- **Game**: a chat box fills the window. ESCAPE shuts the game down.

Text entered in the chat box goes to `mwmud.client.chat.GlobalChat.parse`.
Plain text is sent to the server. Lines that start with `/` are echoed into
the chat and then run as local commands:

- `/help`, `/h`, `/?`: `/help` lists the command modules, `/help -m <module>`
  lists the commands in a module, and `/help <command>` shows one command's
  description, usage and aliases.
- `/clear`, `/cls`: clear the chat window.
- `/login <name>`, `/logout`, `/ping`: forwarded to the server.
- `/disconnect`: forwarded to the server. It also returns you to the title
  screen.

Text layout uses fixed font metrics (`mwmud.client.ui.text_height`), not a
real font.

## Editor tools

- `mwmud.editor.campaign.Campaign(campaigns_dir="Campaigns")`:
  - `set_properties(directory, name, author, description)` sets the
    campaign's directory and properties.
  - `create()` writes `campaign.properties`, `game_data/areas.dat` and an
    empty `editor_data` directory. It raises `ValueError` if the directory or
    the name is empty.
  - `open(directory)` and `close()` open and close a campaign.
  - `save()` writes the properties back to disk.
  - `has_unsaved_changes()` is true once properties are changed on an open
    campaign.
- `mwmud.editor.campaign.list_campaign_directories(path)`: returns the
  campaign directory names, sorted.
- `mwmud.editor.refidtree.RefIdTree`: a tree of `GroupNode` groups and
  `ItemNode` reference ids.
  - `load(path)` and `save(path)` read and write the tree as JSON.
  - `to_json()` and `from_json()` convert it to and from plain dicts.
  - `GroupNode.add_node` adds a copy of a node. It raises `ValueError` for an
    invalid node.
- `mwmud.editor.area.AreaWidget(campaign)`: loads
  `editor_data/areas.groups` from the open campaign if the file exists.
  `Area` holds an area's id and name.

## What the package does not do

- The client has no window and does not read the keyboard. Something else
  must feed it key events and display the canvas operations. There is no
  command that starts the client.
- The editor has no user interface. Campaigns and area trees are handled
  only through the classes above, and areas themselves are not stored.
- The server has no game world. It handles only logins and chat, and it does
  not answer `/ping`.

## Running the tests

```
pytest
```