# bpodio

Pure-Python building blocks for talking to behaviour-control hardware.
Nothing here opens a device itself: every class works on a stream or bus
object you pass in, so the same code can drive real hardware or a
simulation in tests.

## Modules

### `bpodio.arcom` — typed messages on a byte stream

`ArCOM(stream)` reads and writes little-endian values. The stream needs
`read(n)` and `write(data)`; `flush()` and `in_waiting` are used when
present.

- Scalars: `write_byte`, `write_uint8`, `write_char`, `write_uint16`,
  `write_uint32`, `write_int8`, `write_int16`, `write_int32` and the
  matching `read_*` methods.
- Arrays: `write_byte_array`, `write_uint8_array`, `write_char_array`,
  `write_uint16_array`, `write_uint32_array`, `write_int8_array`,
  `write_int16_array`, `write_int32_array`, and `read_*_array(count)`.
  Byte arrays read back as `bytes`, character arrays as `str`
  (Latin-1), numeric arrays as lists of `int`.
- `available()` gives the number of bytes readable without waiting
  (from `in_waiting`, or from the remaining length of a seekable stream,
  otherwise 0). `flush()` flushes the stream if it can.

Values out of range for their type raise `ValueError`. A read that
reaches the end of the stream before it has all its bytes raises
`EOFError`.

### `bpodio.arcomve` — relay-framed writes

`ArCOMvE(stream)` has the same methods as `ArCOM`, but each write call is
sent as one frame: the op-code byte `82` (ASCII `R`, also available as
`RELAY_OPCODE`), the payload length as a 32-bit little-endian integer,
then the payload. An array write is a single frame. Reads are not framed.

### `bpodio.ad5592r` — AD5592R configurable I/O chip

`AD5592R(bus, reads_per_measurement=1)` talks to the chip through `bus`,
an object with `transfer(word) -> int` that exchanges one 16-bit SPI
word. If the bus also has `wait_ready()`, it is called before each ADC
result is read, to wait on the chip's busy line.

On creation the chip is reset, its internal reference enabled, channels
0–6 set to high-Z and channel 7 reserved as the ADC busy output.

- `set_channel_type(channel, channel_type)` chooses a role from
  `ChannelType` (`DI`, `DO`, `AI`, `AO`, `HIGH_Z`, or the integers 0–4);
  `update_channel_types()` sends the configuration and updates the counts
  `n_di`, `n_do`, `n_adc`, `n_dac`, `n_high_z` (channels 0–6).
- `set_do(channel, value)` changes `do_state` for digital-output
  channels only; `write_do()` sends it.
- `read_di()` fills `di_state`; `get_di(channel)` returns the level, or
  `False` for a channel that is not a digital input.
- `write_dac(channel, value)` writes a 12-bit value; it does nothing for
  a channel that is not an analog output.
- `read_adc()` converts every analog input, averaging
  `reads_per_measurement` reads (integer division), into `adc_readout`;
  `get_adc(channel)` returns one value.

Channel numbers outside 0–7 raise `ValueError`.

### `bpodio.duetimer` — timer clock selection and a timer bank

- `best_clock(frequency, master_clock=84_000_000)` returns the
  `TimerClock` (divisors 2, 8, 32, 128) and the compare value that reach
  `frequency` with least error.
- `TimerBank(master_clock)` holds the state of nine timer channels.
  `running(index)` tells whether a timer is counting; `fire(index)`
  delivers a compare interrupt, calling the timer's callback if it is
  running, and returns whether a callback ran.
- `DueTimer(index, bank=None)` is a handle on one channel. `attach_interrupt`,
  `detach_interrupt`, `start(microseconds=-1)`, `stop`, `set_frequency`
  and `set_period` return the timer for chaining. `frequency()` reports
  the rate the chosen divider actually gives and `period()` its length in
  microseconds. `start()` with no period falls back to 1 Hz if no
  frequency was set; a zero period raises `ValueError`.
- `get_available(bank=None)` returns the first timer with no callback,
  or timer 0 if all are taken.

Without a `bank`, timers share one module-level bank.

## What this package does not do

It does not open serial ports or SPI devices, and the timers do not tick
on their own: interrupts happen only when `TimerBank.fire` is called.
There is no command-line program.

## Installation

```
pip install bpodio
```

## Example

```python
import io
from bpodio.arcom import ArCOM

stream = io.BytesIO()
port = ArCOM(stream)
port.write_uint16(0x1234)
port.write_int32_array([-1, 2])
stream.seek(0)
assert port.read_uint16() == 0x1234
assert port.read_int32_array(2) == [-1, 2]
```

```python
from bpodio.duetimer import TimerBank, DueTimer

bank = TimerBank(84_000_000)
timer = DueTimer(1, bank)
timer.attach_interrupt(lambda: print("tick"))
timer.start(100)  # period in microseconds
bank.fire(1)      # prints "tick"
print(timer.frequency(), timer.period())
timer.stop()
```

## Running the tests

```
pip install -e .[test]
pytest
```