"""
Core math modules для mparith

Ядра multiprecision арифметики: нормализация, арифметика O(N²), смена
точности, корни, экспонента и логарифм, тригонометрия, гиперболические и
комплексные функции, gamma, неполная gamma, erf, конверсии.
"""

# Normalization
from mparith.core.math.normalization import (
    move,
    near_unity,
    normalize,
    round_internal,
    same,
    set_short,
    set_zero,
)

# Core Arithmetic
from mparith.core.math.arithmetic import (
    abs_mp,
    add,
    div,
    div_digit,
    half,
    minus,
    minus_one,
    mul,
    mul_digit,
    one_minus,
    plus_one,
    rec,
    sub,
    ten_up,
)

# Precision Conversion
from mparith.core.math.precision import (
    cached_constant,
    entier,
    eps_mp,
    lengthen,
    round_mp,
    shorten,
    trunc,
)

# Integer-valued operations
from mparith.core.math.integer_ops import mod, over, over_digit, pow_int

# Comparisons
from mparith.core.math.compare import compare, eq, ge, gt, le, lt, ne

# Conversions
from mparith.core.math.conversions import (
    bignum_to_record,
    bits_to_mp,
    bits_width,
    bits_words,
    check_bits_value,
    int_to_mp,
    mp_to_bits,
    mp_to_fixed,
    mp_to_int,
    mp_to_real,
    mp_to_string,
    mp_to_unsigned,
    real_to_mp,
    record_to_bignum,
    string_to_mp,
    unsigned_to_mp,
)

# Roots
from mparith.core.math.roots import cbrt, hypot, sqrt

# Exponential / Logarithm
from mparith.core.math.explog import exp, expm1, ln, ln_radix, ln_ten, log, pow_mp

# Trigonometric
from mparith.core.math.trig import (
    PiMultiplier,
    acos,
    acosdg,
    acot,
    acotdg,
    acsc,
    asec,
    asin,
    asindg,
    atan,
    atan2,
    atan2dg,
    atandg,
    cos,
    cosdg,
    cospi,
    cot,
    cotdg,
    cotpi,
    csc,
    pi,
    sec,
    sin,
    sindg,
    sinpi,
    tan,
    tandg,
    tanpi,
)

# Hyperbolic
from mparith.core.math.hyperbolic import acosh, asinh, atanh, cosh, hyp, sinh, tanh

# Complex
from mparith.core.math.complex_ops import (
    cacos,
    cacosh,
    casin,
    casinh,
    catan,
    catanh,
    ccos,
    ccosh,
    cdiv,
    cexp,
    cln,
    cmul,
    csin,
    csinh,
    csqrt,
    ctan,
    ctanh,
)

# Special functions
from mparith.core.math.gamma import beta, beta_inc, gamma, lnbeta, lngamma
from mparith.core.math.gamic import (
    g_cfrac_lower,
    g_cfrac_upper,
    g_func,
    g_ibp,
    gamma_inc_f,
    gamma_inc_g,
    gamma_inc_gf,
    plim,
)
from mparith.core.math.erf import erf, erfc, inverf, inverfc

__all__ = [
    # Normalization
    "move",
    "near_unity",
    "normalize",
    "round_internal",
    "same",
    "set_short",
    "set_zero",
    # Core Arithmetic
    "abs_mp",
    "add",
    "div",
    "div_digit",
    "half",
    "minus",
    "minus_one",
    "mul",
    "mul_digit",
    "one_minus",
    "plus_one",
    "rec",
    "sub",
    "ten_up",
    # Precision Conversion
    "cached_constant",
    "entier",
    "eps_mp",
    "lengthen",
    "round_mp",
    "shorten",
    "trunc",
    # Integer-valued
    "mod",
    "over",
    "over_digit",
    "pow_int",
    # Comparisons
    "compare",
    "eq",
    "ge",
    "gt",
    "le",
    "lt",
    "ne",
    # Conversions
    "bignum_to_record",
    "bits_to_mp",
    "bits_width",
    "bits_words",
    "check_bits_value",
    "int_to_mp",
    "mp_to_bits",
    "mp_to_fixed",
    "mp_to_int",
    "mp_to_real",
    "mp_to_string",
    "mp_to_unsigned",
    "real_to_mp",
    "record_to_bignum",
    "string_to_mp",
    "unsigned_to_mp",
    # Roots
    "cbrt",
    "hypot",
    "sqrt",
    # Exponential / Logarithm
    "exp",
    "expm1",
    "ln",
    "ln_radix",
    "ln_ten",
    "log",
    "pow_mp",
    # Trigonometric
    "PiMultiplier",
    "acos",
    "acosdg",
    "acot",
    "acotdg",
    "acsc",
    "asec",
    "asin",
    "asindg",
    "atan",
    "atan2",
    "atan2dg",
    "atandg",
    "cos",
    "cosdg",
    "cospi",
    "cot",
    "cotdg",
    "cotpi",
    "csc",
    "pi",
    "sec",
    "sin",
    "sindg",
    "sinpi",
    "tan",
    "tandg",
    "tanpi",
    # Hyperbolic
    "acosh",
    "asinh",
    "atanh",
    "cosh",
    "hyp",
    "sinh",
    "tanh",
    # Complex
    "cacos",
    "cacosh",
    "casin",
    "casinh",
    "catan",
    "catanh",
    "ccos",
    "ccosh",
    "cdiv",
    "cexp",
    "cln",
    "cmul",
    "csin",
    "csinh",
    "csqrt",
    "ctan",
    "ctanh",
    # Special functions
    "beta",
    "beta_inc",
    "erf",
    "erfc",
    "g_cfrac_lower",
    "g_cfrac_upper",
    "g_func",
    "g_ibp",
    "gamma",
    "gamma_inc_f",
    "gamma_inc_g",
    "gamma_inc_gf",
    "inverf",
    "inverfc",
    "lnbeta",
    "lngamma",
    "plim",
]
