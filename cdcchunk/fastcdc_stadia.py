"""FastCDC with a 64-bit gear hash and regression (Stadia variant).

Unlike the original FastCDC paper this variant keeps a 64-bit hash and,
when no cut point is found before the end, falls back to the best
"regression" point seen: the position whose hash had the most trailing
zero bits.
"""

from __future__ import annotations

from .config import CDCConfig, Cutpointer, validate_sizes

_MASK64 = (1 << 64) - 1
_HASH_BITS = 64

GEAR64: tuple[int, ...] = (
    0x8491247ACE8FA4ED, 0xEF6F83EF0EB0423A, 0x8E5C2BE1F316D634,
    0x1A6B3ADD4D7FE997, 0x9E4E9C1B8856240D, 0x7901CDCBA45EB71A,
    0x231E85F0FAF483D8, 0x1B4AB739E20B8CB1, 0xDBDA4432CA243F76,
    0xB2D894D2426310CD, 0x839995F33AABD8F1, 0x9CCCD0BBABBAAF9D,
    0x3EF9FD960F823FB6, 0xD5D59780E1F38AF3, 0x27FACF53AC93364F,
    0x8DBAE7FB1A94B826, 0xBCFAF245C81D5B9F, 0x49336C70F611B64E,
    0x3571E070F3A4CD59, 0x5DC06A5CF90A86F6, 0x99ABB6EA0A4F156,
    0xB9B92296E5EB1E22, 0xF9AD0CC35F4EE97, 0x62CB5F8F88A0406B,
    0xC1A11DA8E0E8CC2A, 0x8C239EDAF6069A8C, 0x375E7AF49E5244A2,
    0xC581EF8A03970488, 0xAF77F46327CDF5D, 0x7EF4664D220EDC6,
    0x63F3A647BE9F1614, 0xD2FC59C96D6B87AD, 0x88745637E11038C1,
    0x9C719E92A544113D, 0x6C3EE1140777A315, 0x9FD49DDCE628E564,
    0x10BEF8449642C051, 0x75ADE0F3AD422274, 0x22FF8FBC4242B2C5,
    0x6A6FCDF012903A4B, 0x5ED90BA6DF6F0575, 0xF0E561E75268C2A2,
    0x840D88D4BF9C0B74, 0x9DDB3916E5B076A, 0x49CEE2F4C0320438,
    0xBCFA7FA4BE4291E5, 0x6467B95E9A8356FC, 0xE7038D6F716B766D,
    0x9A69C0BEEC5ADBEC, 0x3F48ED09B0432B98, 0x60D541174DB84DE8,
    0xBFA499091125BF7D, 0x389AA4DA4A299E7B, 0x4C9E09D859F70144,
    0x61A7986DF7E97BCE, 0x31E929CB879C6525, 0x924952EE09E2924F,
    0x1A922510C6FB5CA7, 0xE36A67AA8317D9D6, 0xFC4B6FC00CD35D2E,
    0xA1DFDE3B89F7ECD9, 0x2D2738A1A871B031, 0x626DD9B2E1849709,
    0xC2E5FC1B73153F19, 0xFBDF8057F90CC597, 0xD6B0B92291914061,
    0x712691734A1327C8, 0xD326C9A24910B830, 0x3B5C57B7734B39FD,
    0xFF5091CDB73CEC7, 0x14D9919830ABCE04, 0xEF599887F6A5ABB1,
    0xE92B4A5D2512D9F, 0x8C1343905342C413, 0x557E6F4C5C58C3F6,
    0xE82CEC1B269BBBBD, 0x8978D511054B3AB0, 0xD2FCE22BF9F4E348,
    0x8BF144638A5F5796, 0x647EFBA66EAEF57F, 0xA98D2D10A57E8A7D,
    0xBD3127B0A5D10CE9, 0x371AB70261B6CA43, 0xF0B946207000FBEB,
    0xD629CA24CDC4FD44, 0xEF14B9E0844761A4, 0x3E59F32A56C1FFFB,
    0x4E08A128DCDA76AB, 0x6317214EA7D99FAE, 0xFF484BE613728267,
    0x66A02126378C0480, 0x9D08F636207B4E5A, 0xB117FBF3F69EB6E9,
    0xA3C18816F9459E25, 0x59E006979053D9F0, 0xF2DF699B7BAF4F9A,
    0xCFBD687E95006CED, 0x7F506D200D86899E, 0x8762A217EC25D9C0,
    0x7362C031992D892D, 0xCDCE287DE14A4ADF, 0x9CEA7E1E5D565C7C,
    0x4A52376EB368942, 0xD0DC49A93E262BD2, 0xE17EDE683F556D04,
    0xEC8A9BBD5DE07E1, 0x31D6B2A4E3BD47BF, 0x41136D5B7A1B7D67,
    0x64F41962FE98EB1F, 0x6788E4F777928EE7, 0x661405E078BE20B,
    0x1965662E202A521, 0x7B722C2AA4A198D9, 0x66B4A1D2D763B34C,
    0x296DECE82D0CCEAD, 0x5BC8BC380F8548A, 0xED5F0560F84B91F4,
    0xB82C8C27DC0768F1, 0xF5AE73B72C3830D6, 0x6D330E412D58C450,
    0xF0260BBF7EB6A5F6, 0x2EAE75BD682D009C, 0xC50F47D01DA153B4,
    0x82FDA4160237328D, 0x71BF180EB671C7C6, 0x3C211CAE288A846B,
    0xB83883A2EA404ED5, 0x301F89D274C8B96, 0x3028FFFF46156359,
    0x9623CFF53BD22F69, 0x254C8716768A76BD, 0xF43428B02AC7E71,
    0xEF87F74136018CD7, 0xED70F6CC2E5A1B14, 0xCFCE9591664DECD0,
    0x526DA3EC58C0EB1E, 0xB022B0DE25996366, 0xEE456D90B08673A5,
    0x6EE7B2A4AFCAEDED, 0xEEDCADEC61692821, 0xC890F956F371C6AA,
    0xDBB1355802CC4A14, 0x2AA96A60229886FB, 0xC9438611ED6D39A,
    0x48FDB9CAA455E89F, 0xB7FB8A4A9E0431CD, 0xDB5D2A2C73183AAB,
    0xC0CAD5ED82CEA56E, 0x8CD515D28962804C, 0xEA2EDE16FE381A33,
    0x80B05FFBB4831437, 0xCF784306C0E1DA56, 0x25CFA51617691B76,
    0x2DDD6C7C41A9B6A1, 0xC06D1038B17C2DF5, 0x322CD3D4CA044B65,
    0xA6FFF882E0BFFB20, 0xAE836CCFAE4A8DAA, 0x688D1558D2A2889E,
    0xAD6F0B615DBAD0BC, 0xB63532F10C0B60D, 0x951FC0FE5888C690,
    0x313DFC918CB10A91, 0xBC6918A29AB8F646, 0xA623D7D58DECF648,
    0xC6AAE06BDC5AFA94, 0x786216ECE87786CD, 0x89690CF7BF52AE2A,
    0x183D1031E43ECC8, 0x9A4E252BFE5E7448, 0xC890305167FCCF49,
    0xD9BD458EA0056928, 0xDE45A84A1D88F826, 0xD11B9347A55C9D50,
    0x12517B203BA99CAF, 0x7FBFDDA8D0DE88CA, 0xF781C2A0D2B990A8,
    0x96AB7398CE099B8F, 0x5F94AC89FA3C40EF, 0xFA8F052C301A6974,
    0x86792E4991DF575F, 0x3C29997D479A7560, 0x1AA5808EEF6EE029,
    0x808A5210862E83A, 0xF0255F3AADDB1D99, 0x137C229A37BE7EE6,
    0xCCCEFC9FBDF1A5E3, 0xEBBD33FB3AF1D2F2, 0xB33A5454C9BDF708,
    0x3BAF4C066AEB99F0, 0xCF9E7C9E38C9CBDE, 0x41BCC7608E4358A,
    0x45E86BC18EBED4ED, 0x45151340BF7DEAEC, 0x2BABDC7A53300776,
    0x7A8C8E69F1DF2E17, 0x840FCCF20170375, 0x258E78C689D7F1CC,
    0x513AD967F73A79F0, 0x572B72ACC9FDC94E, 0x6716050E6D3C4BCD,
    0x417CD4EA3E740EA6, 0xB06821AE68F8F53, 0x30C00B83B62D41B5,
    0x6DA4D1E65FB04B84, 0xB2259595A7BBC508, 0x5DDE25E3D8CCE8AB,
    0x5612238A2EB7BD60, 0x1518AF25CEE8B39D, 0x86C4D5C83D4F739,
    0xAC6065D0956A8218, 0xED8A1D026CF49E4, 0x32F6AB67B23CA47,
    0x3F8A2D37EC384725, 0x1258E6FDD59E87D9, 0xB8E26EC0772CAED3,
    0x14EAB3CFCA9095F5, 0x272A6400D862DA91, 0xAE9DB7ECDA64622C,
    0xF2A6239FCDE76BA8, 0x6387A298AE9F57E4, 0xC55A0E84950A8F9,
    0xBA71E19716954CFD, 0xD2E3CCA8F3D0E7D3, 0xD9D0D222EC1A10D5,
    0x8F2CF116E24B08BA, 0x757B0F05C10C6643, 0x399E29AA2535CC45,
    0xC1C75686141DBA8B, 0xE7CB6AE92546B537, 0xA2C78F99E81FC094,
    0x9F44F935B6E331C3, 0xD4F5BD7A41C444E4, 0xE9039FDD669D1FF2,
    0xE0529652C458F1E4, 0xC587376080A8635B, 0x8064DA4AB9A978E5,
    0x86189CB0545C0CEA, 0x57E9EAC3FF58F820, 0xDB426E8AC3C6111F,
    0xFB4034C6B66A134D, 0xE6BF1B2F31EBB4F, 0xA4BEABDA26098F32,
    0x2A679AA4D23B8859, 0x26E660C6E4F04CED, 0xB984B1386DE0D796,
    0x1DB677B46E34D965, 0xB31E7767A947C68, 0x8F77A32A1E3BE2D5,
    0x813137A9410CA6C5, 0x6AA07239BA3CAE35, 0x7584B6295F9B266D,
    0xFED8B9EFFBED289B, 0x98EA5373BF61B09C, 0xC4B5E89CBB05C329,
    0x611F22B45DA87895,
)


def default_fastcdc_stadia_options() -> CDCConfig:
    """Return a fresh copy of the default sizes for this chunker."""
    return CDCConfig(min_size=2 * 1024, target_size=10 * 1024, max_size=64 * 1024)


class FastCDCStadia(Cutpointer):
    """FastCDC with a 64-bit gear hash and regression fallback."""

    name = "fastcdc-stadia-64bit-regression"

    def __init__(self, opts: CDCConfig | None = None) -> None:
        self.opts = opts if opts is not None else default_fastcdc_stadia_options()

    def validate(self, options: CDCConfig) -> None:
        """Raise a CDCConfigError subclass if ``options`` is out of range."""
        validate_sizes(options)

    def algorithm(self, options: CDCConfig, data: bytes, n: int) -> int:
        """Return the end of the first chunk in ``data[:n]``; never more than ``n``.

        Raises ValueError when ``n`` exceeds ``len(data)``.
        """
        self._require_n(data, n)
        min_size = options.min_size
        max_size = options.max_size
        normal_size = options.target_size

        thresh = _MASK64 // (normal_size - min_size + 1)

        if n <= min_size:
            return n
        if n >= max_size:
            n = max_size

        buf = bytes(data[:n])
        gear = GEAR64

        regression_len = n
        regression_mask = 0  # zero matches anything
        # All ones avoids zero-length chunks when min_size is zero.
        hash_ = _MASK64

        for byte in buf[max(min_size - _HASH_BITS, 0):min_size]:
            hash_ = ((hash_ << 1) + gear[byte]) & _MASK64

        for i in range(min_size, n):
            if not hash_ & regression_mask:
                if hash_ <= thresh:
                    return i
                regression_len = i
                regression_mask = _MASK64
                while hash_ & regression_mask:
                    regression_mask = (regression_mask << 1) & _MASK64
            hash_ = ((hash_ << 1) + gear[buf[i]]) & _MASK64

        # Return the best regression point, or the end if that is better.
        if hash_ & regression_mask:
            return regression_len
        return n