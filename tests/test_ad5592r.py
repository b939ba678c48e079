import pytest

from bpodio.ad5592r import AD5592R, ChannelType


class FakeBus:
    def __init__(self, responses=(), di_response=0):
        self.sent = []
        self._responses = list(responses)
        self._ready = False
        self.ready_calls = 0
        self.di_response = di_response

    def wait_ready(self):
        self.ready_calls += 1
        self._ready = True

    def transfer(self, word):
        self.sent.append(word)
        if self._ready:
            self._ready = False
            return self._responses.pop(0)
        if word >> 8 == 0x54:
            return self.di_response
        return 0


def make(responses=(), di_response=0, reads=1):
    bus = FakeBus(responses, di_response)
    chip = AD5592R(bus, reads)
    bus.sent.clear()
    return chip, bus


def test_constructor_sends_setup_sequence():
    bus = FakeBus()
    AD5592R(bus)
    assert bus.sent == [0x7DAC, 0x5800, 0x1B30, 0x5A7F, 0x287F, 0x4180]


def test_reads_per_measurement_must_be_positive():
    with pytest.raises(ValueError):
        AD5592R(FakeBus(), 0)


def test_busy_channel_is_a_digital_output():
    chip, bus = make()
    chip.set_do(7, 1)
    chip.write_do()
    assert chip.do_state == 0x80
    assert bus.sent == [0x4880]


def test_set_do_ignores_non_output_channel():
    chip, _ = make()
    chip.set_do(0, 1)
    assert chip.do_state == 0


def test_set_do_clears_bit():
    chip, _ = make()
    chip.set_channel_type(2, ChannelType.DO)
    chip.set_do(2, True)
    chip.set_do(2, False)
    assert chip.do_state == 0


def test_write_dac_only_for_analog_outputs():
    chip, bus = make()
    chip.write_dac(2, 0x123)
    assert bus.sent == []
    chip.set_channel_type(2, ChannelType.AO)
    chip.update_channel_types()
    bus.sent.clear()
    chip.write_dac(2, 0x123)
    (word,) = bus.sent
    assert word >> 15 == 1
    assert (word >> 12) & 0x7 == 2
    assert word & 0x0FFF == 0x123


def test_read_di_and_get_di():
    chip, _ = make(di_response=0x0009)
    chip.set_channel_type(0, ChannelType.DI)
    chip.set_channel_type(3, ChannelType.DI)
    chip.update_channel_types()
    chip.read_di()
    assert chip.get_di(0) is True
    assert chip.get_di(3) is True
    assert chip.get_di(1) is False


def test_get_di_false_for_non_input_even_if_bit_set():
    chip, _ = make(di_response=0xFF)
    chip.set_channel_type(0, ChannelType.DI)
    chip.read_di()
    assert chip.di_state == 0xFF
    assert chip.get_di(5) is False


def test_read_adc_averages_and_strips_channel_bits():
    responses = [0x0000 | 100, 0x1000 | 50, 0x0000 | 300, 0x1000 | 150]
    chip, bus = make(responses=responses, reads=2)
    chip.set_channel_type(0, ChannelType.AI)
    chip.set_channel_type(1, ChannelType.AI)
    chip.update_channel_types()
    bus.sent.clear()
    chip.read_adc()
    assert chip.get_adc(0) == 200
    assert chip.get_adc(1) == 100
    assert bus.ready_calls == 4
    assert bus.sent[0] == 0x1203
    assert bus.sent[-1] == 0x1200


def test_read_adc_leaves_other_channels():
    chip, _ = make(responses=[0x0FFF])
    chip.set_channel_type(4, ChannelType.AI)
    chip.read_adc()
    assert chip.adc_readout[4] == 0x0FFF
    assert chip.get_adc(0) == 0


def test_update_channel_types_counts():
    chip, bus = make()
    chip.set_channel_type(0, ChannelType.DI)
    chip.set_channel_type(1, ChannelType.DO)
    chip.set_channel_type(2, ChannelType.AI)
    chip.set_channel_type(3, ChannelType.AO)
    chip.update_channel_types()
    assert (chip.n_di, chip.n_do, chip.n_adc, chip.n_dac) == (1, 1, 1, 1)
    assert chip.n_high_z == 3
    assert len(bus.sent) == 8
    assert bus.sent[0] == bus.sent[1]


def test_default_update_all_high_z():
    chip, _ = make()
    chip.update_channel_types()
    assert chip.n_high_z == 7
    assert chip.n_do == 0


def test_invalid_channel_type():
    chip, _ = make()
    with pytest.raises(ValueError):
        chip.set_channel_type(0, 9)


def test_invalid_channel():
    chip, _ = make()
    with pytest.raises(ValueError):
        chip.get_adc(8)