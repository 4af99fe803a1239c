# ncmkit

Helpers for running daily tasks against a cloud music service. The package
covers cron scheduling, alert delivery over HTTP, and the option checks, storage
keys and payload records that those tasks use. It needs nothing beyond the
standard library.

## Modules

- `ncmkit.cron`:
  - `parse_standard(expression)` parses a five-field crontab expression. It also
    accepts a descriptor (`@daily`, `@hourly`, `@weekly`, `@monthly`, `@yearly`,
    `@annually`, `@midnight`) or `@every <duration>`, such as `@every 1h30m`.
  - A leading `TZ=<zone>` or `CRON_TZ=<zone>` sets the time zone of the schedule.
  - The result is a `CronSchedule`. Its `next(after)` method returns the first
    time the schedule fires strictly after `after`. It returns `None` if the
    schedule does not fire within five years.
  - Bad expressions raise `CronError`, which is a subclass of `ValueError`.
- `ncmkit.task`: `TaskOptions` chooses which of the `sign`, `partner` and
  `scrobble` tasks run, and holds a crontab for each.
  - `enabled_tasks()` lists the chosen tasks. It lists all three when `run_all`
    is set or when none is chosen.
  - `validate()` checks the crontab of every enabled task. When all tasks run, it
    reports every problem together, one per line. Otherwise it raises the first
    problem.
- `ncmkit.partner`: `PartnerOptions` holds the options for the daily rating task.
  - `star` and `ext_star` are score levels. Each must hold one to five unique
    values from 1 to 5.
  - `ext_num` is a number from 0 to 15, or `"random"`.
  - `validate()` checks these options.
  - `extra_count(rng)` gives the number of extra songs to rate. It gives 2 to 7
    when `ext_num` is `"random"`.
  - `extra_score(eva_types, rng)` builds the JSON score object.
- `ncmkit.scrobble`:
  - `ScrobbleOptions` holds `num`, which must be 1 to 300. Its
    `remaining(finished)` method gives how many songs are left to play today,
    within the daily limit of 300.
  - `NeverHeardSong.play_log()` builds the web-log entry for one full play.
  - `scrobble_record_key` and `scrobble_today_num_key` give the storage key
    layout.
- `ncmkit.decrypt`:
  - The `Payload`, `Request` and `Response` records hold captured API calls.
    Their `to_dict()` methods give the JSON form without the empty fields.
  - `is_match(pattern, text)` matches a route against a glob where `*` stands for
    any run of characters.
  - `split_eapi_plaintext(text)` splits decrypted eapi text into url, payload and
    digest.
  - `api_kind(path, default)` infers `eapi`, `weapi` and the like from a request
    path.
- `ncmkit.alert_http`:
  - `HttpAlert(HttpConfig(...))` posts alert content as JSON to `host`, with
    basic auth from `username` and `password`.
  - TLS certificates are not verified.
  - `send(content)` raises `ConnectionError` if the answer is not 200.
  - `close()` makes any later request ask the server to close the connection.
  - A config without a host raises `ValueError`.
- `ncmkit.ascii`: ASCII-only string helpers, namely `equal_fold`, `is_print`,
  `is_ascii` and `to_lower`. `to_lower` returns `None` for text that is not
  printable ASCII.

## Examples

```python
from datetime import datetime
from ncmkit.cron import parse_standard

schedule = parse_standard("0 18 * * *")
schedule.next(datetime(2024, 1, 1, 12, 0))   # datetime(2024, 1, 1, 18, 0)
```

```python
from ncmkit.task import TaskOptions

options = TaskOptions(sign_in=True, sign_in_cron="0 10 * * *")
options.enabled_tasks()   # ['sign']
options.validate()        # raises ValueError if the crontab is bad
```

```python
from ncmkit.scrobble import ScrobbleOptions, scrobble_today_num_key

ScrobbleOptions(num=300).remaining(120)   # 180
scrobble_today_num_key("42")              # 'scrobble:today:42'
```

```python
import random
from ncmkit.partner import PartnerOptions

options = PartnerOptions(star=[3, 4], ext_star=[2, 3, 4], ext_num="random")
options.validate()
options.extra_count(random.Random(1))     # a number from 2 to 7
```

```python
from ncmkit.decrypt import api_kind, is_match, split_eapi_plaintext

is_match("/eapi/*", "/eapi/song/detail")                    # True
api_kind("/api/eapi/nos/token/alloc", "weapi")              # 'eapi'
split_eapi_plaintext("/api/x-36cd479b6b5-{}-36cd479b6b5-d") # ('/api/x', '{}', 'd')
```

```python
from ncmkit.alert_http import HttpAlert, HttpConfig

alert = HttpAlert(HttpConfig(host="https://alerts.example.com/hook", timeout=10))
alert.send('{"text": "daily tasks done"}')
```

## What this package does not do

- It has no command-line program.
- It has no client for the music service's API. It does no login and does not
  encrypt or decrypt traffic. `ncmkit.decrypt` only models and splits data that
  has already been decrypted.
- It has no cookie jar and keeps no cookies on disk.
- The only alert channel is HTTP. There is no mail sender.
- `ncmkit.cron` computes firing times but does not run jobs. Running tasks on
  their schedule is left to the caller.