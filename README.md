# cdcchunk

Content-defined chunking (CDC) for deduplication.

A content-defined chunker splits a byte string at positions chosen by the
content itself rather than at fixed offsets. Inserting or deleting a few
bytes then changes only the chunks around the edit, so two versions of a
file share almost all of their chunks and only the changed ones need to be
stored or sent.

The package is pure Python and has no runtime dependencies.

## Chunking algorithms

Every chunker derives from the abstract `Cutpointer` class in
`cdcchunk.config`. It has an `opts` attribute (a `CDCConfig`), a read-only
`config` property returning it, a `name` string, and the methods
`algorithm(options, data, n)`, `next_cut(data)`, `cutpoints(data, max_points)`
and `set_config(cfg)`.

| Module                    | Class           | Approach                                                         |
|---------------------------|-----------------|------------------------------------------------------------------|
| `cdcchunk.ultracdc`       | `UltraCDC`      | Hamming distance to `0xAA` over 8-byte windows, with a forced cut after long runs of repeated 8-byte blocks |
| `cdcchunk.fastcdc_stadia` | `FastCDCStadia` | 64-bit gear hash; falls back to the best "regression" point seen |
| `cdcchunk.fastcdc_plakar` | `FastCDCPlakar` | 64-bit gear hash with a stricter mask before the target size and a looser one after |
| `cdcchunk.fnv`            | `FNVCDC`        | FNV-1a hash from the chunk start; cut when the low bits are zero |
| `cdcchunk.rabin`          | `RabinKarpCDC`  | Windowed Rabin-Karp rolling hash                                  |

`cdcchunk.registry` maps a `CDCAlgo` value (`ULTRA_CDC`, `FASTCDC_STADIA`,
`FASTCDC_PLAKAR`, `FNV`, `RABIN_KARP`) to a new chunker with
`get_cutpointer(choice, cfg)`. A `cfg` of `None` selects that algorithm's
defaults; an unknown choice raises `ValueError`.

Each algorithm module has a `default_*_options()` function
(`default_ultracdc_options`, `default_fastcdc_stadia_options`,
`default_fastcdc_plakar_options`, `default_fnvcdc_options`,
`default_rabinkarp_options`) returning a fresh `CDCConfig` with
`min_size`, `target_size` and `max_size`, which callers may modify freely.
The defaults are a 2 KiB minimum, a 64 KiB maximum and a 10 KiB target
(8 KiB for `FastCDCPlakar`).

### Validation

`UltraCDC`, `FastCDCStadia`, `FastCDCPlakar` and `RabinKarpCDC` have a
`validate(options)` method that calls `validate_sizes` from
`cdcchunk.config`. It requires `64 <= min_size < target_size < max_size`
with every size at most 1 GiB, and raises `TargetSizeError`,
`MinSizeError` or `MaxSizeError` (all subclasses of `CDCConfigError`,
itself a `ValueError`). `FNVCDC.validate` checks only the target size.

Chunkers do not validate their configuration on their own; call
`validate` when the sizes come from outside.

## Usage

Split a buffer into chunks with UltraCDC and its default sizes:

```python
from cdcchunk.ultracdc import UltraCDC, default_ultracdc_options

chunker = UltraCDC(default_ultracdc_options())

with open("some.bin", "rb") as fh:
    data = fh.read()

cuts = chunker.cutpoints(data, 0)   # 0 means: find every cut

start = 0
for end in cuts:
    chunk = data[start:end]
    start = end
```

`cutpoints` returns cumulative end offsets. When `max_points` is zero or
negative the last one is `len(data)`; a positive `max_points` stops after
that many cuts.

To find only the end of the first chunk, use `next_cut`:

```python
first_chunk_len = chunker.next_cut(data)
```

`algorithm(options, data, n)` looks only at `data[:n]` and never returns
more than `n`; it raises `ValueError` if `n` exceeds `len(data)`.

Pick an algorithm by identifier:

```python
from cdcchunk.registry import CDCAlgo, get_cutpointer

chunker = get_cutpointer(CDCAlgo.FASTCDC_PLAKAR, None)
cuts = chunker.cutpoints(data, 0)
```

## Supporting modules

- `cdcchunk.rolling` — stand-alone rolling hashes: `RollingHash`
  (32-bit linear congruential sequence with `next` and `skip`),
  `RabinKarp`, `GearHash` (using the `FastCDCPlakar` gear table),
  `Buzhash` (its `table` is all zeros until you assign one) and
  `FNVRollingHash` (`update`, `reset`, `current`). The `roll` and `update`
  methods take a byte value 0–255 and raise `ValueError` otherwise.
- `cdcchunk.chunker` — `Chunker`, which decides boundaries from hash values
  fed one per byte (`is_block`, `add_block`) to give exponentially
  distributed chunk sizes; `Chunker.from_avg` builds one from a desired
  average length, found by `get_target_len`.
- `cdcchunk.stats` — `StdDevTracker` for a one-pass weighted mean and
  sample standard deviation (`add_obs`, `mean`, `sample_stddev`), and
  `mean_sd` for a plain sequence.
- `cdcchunk.zerobytes` — `all_zero`, `all_zero_fast`, `longest_zero_span`
  and `longest_zero_span_chunked`.
- `cdcchunk.formatting` — `format_under`, which groups digits with
  underscores (`1048576` becomes `"1_048_576"`).
- `cdcchunk.fsutil` — `file_exists`, `dir_exists`, `file_size`,
  `is_writable` and `copy_file`.
- `cdcchunk.compare` — compare directory trees and files, for example in
  tests of a sync tool: `compare_dirs`, `list_files_under_dir`,
  `compare_files`, `compare_files_diff_len`, `compare_files_first_n_lines`
  and `string_slice_sub`. `compare_dirs` and `compare_files` run the
  system `diff` program.

Summarise chunk sizes:

```python
from cdcchunk.formatting import format_under
from cdcchunk.stats import mean_sd

sizes = [b - a for a, b in zip([0, *cuts], cuts)]
mean, sd = mean_sd([float(s) for s in sizes])
print(format_under(int(mean)), format_under(int(sd)))
```

Find the longest run of zero bytes:

```python
from cdcchunk.zerobytes import longest_zero_span

start, length = longest_zero_span(b"\x01\x00\x00\x00\x00\x01")
# (1, 4)
```

## What this package does not do

It is a library of chunking algorithms and helpers only. It has no
command-line program, no server, and no network protocol for copying or
synchronising files between machines; it does not scan directories into
file lists, hash chunks or transfer them. Those parts are left to the
application that uses it.

## Tests

```
pip install -e ".[test]"
pytest
```