# qbotkit

The game logic behind a set of group chat bot features. It is not tied to
any chat framework: every feature is a plain Python object or function.
Your bot passes in group ids, user ids, timestamps and a random source, and
turns the results into messages.

## Installation

```
pip install qbotkit
```

The package uses only the standard library. Persistent state is kept in
SQLite files through `sqlite3`.

## Modules

### `qbotkit.marriage`

A daily "marry a group member" registry.

- `Registry(path)` opens or creates the SQLite file. It can be used as a
  context manager; `close()` closes it.
- `settings(gid)` returns the group's `GroupSettings` (`can_match`,
  `can_ntr`, `cd_time` in hours, `updatetime`), or defaults when none are
  stored. `update_settings(settings)` stores them.
- `open_day(gid, now)` clears the group's roster when the stored day is not
  the day of `now`.
- `register(gid, uid, target, username, targetname, now)` records a
  `Marriage`; a `target` of `0` marks a proud single (`Marriage.is_single`).
- `lookup(gid, uid)` finds the record where the user is either party, or
  returns `None`.
- `roster(gid)` lists today's couples, singles left out.
- `reset(gid)` drops one group's roster (raising `LookupError` when there is
  none); `reset()` drops every table except the favourability table.
- `unmarried(gid, members)` takes `(user_id, last_sent_time)` pairs and
  returns the still-unregistered users among the 30 most recently active.
- `truncate_name(name, measure, limit=350)` shortens a name with `......`
  when the widths returned by `measure` for its characters exceed `limit`.

### `qbotkit.score`

A daily sign-in with levels.

- `ScoreDB(path)` stores scores and sign-in counters: `get_score`,
  `set_score`, `get_sign_in` (returns `(count, updated_at)`),
  `set_sign_in_count` and `top_scores(n)`.
- `get_rank(count)` gives the level for a score, `next_rank_score(rank)` the
  score the next level needs (capped at `SCORE_MAX`, 1200).
- `sign_in_reward(rank, rng)` is the coins earned by a sign-in.
- `hour_word(hour)` is the greeting for an hour of the day.

### `qbotkit.reborn`

A weighted "reincarnation" simulator.

- `WeightedChooser(choices)` picks items with probability proportional to
  integer weights; `pick(rng)` draws one.
- `load_rates(path)` reads `[{"name": ..., "weight": ...}]` from JSON and
  `area_chooser(rates)` builds a chooser from the fractional weights.
- `reborn(areas, rng)` returns the resulting message: a birthplace and sex,
  or a failed birth.

### `qbotkit.sleep`

Good-morning and good-night ranking per group.

- `SleepDB(path)` with `sleep(gid, uid, now)` and `get_up(gid, uid, now)`;
  both return the user's position tonight or this morning and the time since
  their last entry as a `timedelta`.
- `split_duration(seconds)` splits seconds or a `timedelta` into hours,
  minutes and seconds.
- `is_morning(hour)` (6 to 12) and `is_evening(hour)` (21 to 3) tell whether
  the hour counts.

### `qbotkit.tarot`

A tarot deck.

- `Deck.from_json(cards_json, formations_json)` builds a `Deck` of `Card`s
  and `Formation`s from JSON text or already-parsed mappings.
- `draw(kind, count, rng)` draws 1 to 20 distinct cards as `Draw`s; `kind`
  containing `小` picks minor arcana, otherwise major. A count outside that
  range raises `ValueError`.
- `interpret(name)` looks a card up by name (`KeyError` when unknown);
  `card_list_text()` is the overview of card names.
- `spread(kind, formation_name, rng)` lays out a named spread (`混合` draws
  from the whole deck); an unknown spread raises `LookupError` listing the
  known ones.
- A `Draw` gives its `position`, `description`, `image_url`, `message()` and
  `spread_line()`.

### `qbotkit.nativewife`

A gallery of "wife" pictures per group, kept on disk.

- `WifeGallery(base)` stores pictures as `<base>/<gid in base 36>/<name>`,
  with `wives(gid)`, `add(gid, name, data)`, `remove(gid, name)` and
  `draw(gid, nickname, date)`, which returns `(name, path)` and raises
  `LookupError` for an empty gallery.
- `daily_wife(names, nickname, date)` picks the same name for one nickname
  for the whole day.
- `sanitize_wife_name(text, command)` takes the name after the command, with
  spaces and path separators removed.

## Example

```python
import random
from datetime import datetime

from qbotkit.marriage import Registry
from qbotkit.score import get_rank, sign_in_reward

now = datetime.now()
with Registry("marriage.db") as registry:
    registry.open_day(1001, now)
    registry.register(1001, 42, 43, "alice", "bob", now)
    print(registry.roster(1001))

print(sign_in_reward(get_rank(25), random.Random()))
```

## What the package does not do

- It does not connect to a chat service, parse commands or send messages;
  your bot does that and calls these functions.
- It keeps no favourability scores or skill cooldowns, and has no eligibility
  checks for proposing, divorcing or matchmaking; only the registry and its
  settings are provided.
- It draws no images or charts and downloads nothing: picture bytes for the
  gallery, rate files and tarot JSON are supplied by the caller.

## Tests

```
pip install -e .[test]
pytest
```