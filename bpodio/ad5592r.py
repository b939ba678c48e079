"""Driver model for an AD5592R eight-channel configurable I/O chip."""

from __future__ import annotations

import enum
from typing import Protocol

CHANNEL_COUNT = 8
# Channel 7 is reserved as the ADC busy indicator.
_USER_CHANNELS = range(7)

_DATA_MASK = 0x0FFF


class SpiBus(Protocol):
    """A 16-bit full-duplex SPI link to the chip.

    ``wait_ready()`` is optional; when present it blocks until the
    chip's busy line shows a conversion has finished.
    """

    def transfer(self, word: int) -> int: ...


class ChannelType(enum.IntEnum):
    """How a channel of the chip is configured."""

    DI = 0
    DO = 1
    AI = 2
    AO = 3
    HIGH_Z = 4


def _check_channel(channel: int) -> int:
    if not 0 <= channel < CHANNEL_COUNT:
        raise ValueError(f"channel must be in 0..{CHANNEL_COUNT - 1}, got {channel}")
    return channel


def _bit(mask: int, channel: int) -> bool:
    return bool(mask >> channel & 1)


class AD5592R:
    """Configures channels of the chip and reads or writes them over SPI."""

    def __init__(self, bus: SpiBus, reads_per_measurement: int = 1):
        if reads_per_measurement < 1:
            raise ValueError("reads_per_measurement must be at least 1")
        self._bus = bus
        self.reads_per_measurement = reads_per_measurement
        self.n_dac = 0
        self.n_adc = 0
        self.n_do = 0
        self.n_di = 0
        self.n_high_z = 0
        self.do_state = 0
        self.di_state = 0
        self.adc_readout = [0] * CHANNEL_COUNT
        self._is_dac = 0
        self._is_adc = 0
        self._is_di = 0

        self._write(0x7D, 0xAC)  # software reset
        self._write(0x58, 0x00)  # power up outputs, enable internal reference
        self._write(0x1B, 0x30)  # ADC buffer on, outputs at 2x reference

        # Tri-state every channel by configuring it as a powered-down DAC.
        self._is_high_z = 0x7F
        self._write(0x5A, self._is_high_z)
        self._write(0x28, self._is_high_z)

        # Channel 7 drives the ADC busy signal.
        self._is_do = 0x80
        self._write(0x41, self._is_do)

    # -- SPI ---------------------------------------------------------------

    def _transfer(self, word: int) -> int:
        return self._bus.transfer(word & 0xFFFF) & 0xFFFF

    def _write(self, high: int, low: int) -> int:
        return self._transfer((high & 0xFF) << 8 | (low & 0xFF))

    def _wait_ready(self) -> None:
        wait_ready = getattr(self._bus, "wait_ready", None)
        if wait_ready is not None:
            wait_ready()

    # -- digital -----------------------------------------------------------

    def set_do(self, channel: int, value) -> None:
        """Set the level of a digital output in ``do_state``; ``write_do`` sends it."""
        _check_channel(channel)
        if _bit(self._is_do, channel):
            if value:
                self.do_state |= 1 << channel
            else:
                self.do_state &= ~(1 << channel) & 0xFF

    def write_do(self) -> None:
        """Drive the digital outputs to the levels in ``do_state``."""
        self._write(0x48, self.do_state)

    def read_di(self) -> None:
        """Read the digital inputs into ``di_state``."""
        self._write(0x54, self._is_di)
        response = self._write(0x54, self._is_di)
        self.di_state = response & 0xFF

    def get_di(self, channel: int) -> bool:
        """Return a digital input's level from the last ``read_di``."""
        _check_channel(channel)
        if not _bit(self._is_di, channel):
            return False
        return _bit(self.di_state, channel)

    # -- analog ------------------------------------------------------------

    def write_dac(self, channel: int, value: int) -> None:
        """Write a 12-bit value to a channel configured as an analog output."""
        _check_channel(channel)
        if not _bit(self._is_dac, channel):
            return
        word = 0x8000 | (channel & 0x7) << 12 | (value & _DATA_MASK)
        self._transfer(word)

    def get_adc(self, channel: int) -> int:
        """Return a channel's value from the last ``read_adc``."""
        return self.adc_readout[_check_channel(channel)]

    def read_adc(self) -> None:
        """Convert every analog input, averaging ``reads_per_measurement`` reads."""
        channels = [ch for ch in _USER_CHANNELS if _bit(self._is_adc, ch)]
        totals = dict.fromkeys(channels, 0)
        self._write(0x12, self._is_adc)  # request the conversion sequence
        self._transfer(0)  # dummy read starts the first conversion
        for _ in range(self.reads_per_measurement):
            for channel in channels:
                self._wait_ready()
                totals[channel] += self._transfer(0) & _DATA_MASK
        for channel, total in totals.items():
            self.adc_readout[channel] = total // self.reads_per_measurement
        self._write(0x12, 0x00)  # end the sequence

    # -- configuration -----------------------------------------------------

    def set_channel_type(self, channel: int, channel_type) -> None:
        """Choose a channel's role; ``update_channel_types`` applies it."""
        _check_channel(channel)
        kind = ChannelType(channel_type)
        bit = 1 << channel
        clear = ~bit & 0xFF
        self._is_di &= clear
        self._is_do &= clear
        self._is_adc &= clear
        self._is_dac &= clear
        self._is_high_z &= clear
        if kind is ChannelType.DI:
            self._is_di |= bit
        elif kind is ChannelType.DO:
            self._is_do |= bit
        elif kind is ChannelType.AI:
            self._is_adc |= bit
        elif kind is ChannelType.AO:
            self._is_dac |= bit
        else:
            self._is_high_z |= bit

    def update_channel_types(self) -> None:
        """Send the channel configuration to the chip and recount channels."""
        self._write(0x50, self._is_di)
        self._write(0x50, self._is_di)
        self._write(0x41, self._is_do)
        self._write(0x20, self._is_adc)
        self._write(0x5A, self._is_high_z)
        self._write(0x28, self._is_dac)
        self._write(0x5A, self._is_high_z)
        self._write(0x28, self._is_high_z | self._is_dac)

        def count(mask: int) -> int:
            return sum(_bit(mask, ch) for ch in _USER_CHANNELS)

        self.n_adc = count(self._is_adc)
        self.n_dac = count(self._is_dac)
        self.n_do = count(self._is_do)
        self.n_di = count(self._is_di)
        self.n_high_z = count(self._is_high_z)