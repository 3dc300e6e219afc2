"""A small tour of Python language features, checked with casekit assertions.

Run with:  casekit run examples/language_features/cases.py
"""
from __future__ import annotations

import asyncio
from dataclasses import FrozenInstanceError, dataclass

from casekit.core import (
    CaseRegistry,
    assert_deep_equal,
    assert_equal,
    assert_throws,
)

registry = CaseRegistry("language_features")


# Functions and bindings


@registry.case("Lambda functions")
def lambda_functions() -> None:
    def my_function(num1, num2):
        return num1 + num2

    assert_equal(my_function(4, 6), 10)

    my_func2 = lambda num: num + 6  # noqa: E731
    assert_equal(my_func2(4), 10)


@registry.case("Rebinding names")
def rebinding_names() -> None:
    my_bool = True
    assert_equal(my_bool, True)

    my_bool = False
    assert_equal(my_bool, False)


@registry.case("Frozen bindings")
def frozen_bindings() -> None:
    @dataclass(frozen=True)
    class Settings:
        flag: bool

    settings = Settings(flag=True)
    assert_equal(settings.flag, True)

    def reassign() -> None:
        settings.flag = False  # type: ignore[misc]

    assert_throws(reassign, expected=FrozenInstanceError)


# Classes


@registry.case("Classes")
def classes() -> None:
    class Doubler:
        def __init__(self, number):
            self.number = number

        def double(self):
            return self.number * 2

    my_doubler = Doubler(10)
    assert_equal(my_doubler.double(), 20)


@registry.case("Inheritance")
def inheritance() -> None:
    class Adder:
        def __init__(self, number):
            self.number = number

        def add(self, other):
            return self.number + other

    my_adder = Adder(5)
    assert_equal(my_adder.add(5), 10)

    class Subtractor(Adder):
        def subtract(self, other):
            return self.number - other

    my_sub = Subtractor(10)
    assert_equal(my_sub.subtract(5), 5)
    assert_equal(my_sub.add(5), 15)


@registry.case("Static methods")
def static_methods() -> None:
    class Multiplier:
        @staticmethod
        def multiply(one, two):
            return one * two

    assert_equal(Multiplier.multiply(3, 4), 12)


@registry.case("Properties")
def properties() -> None:
    class Whoops:
        def __init__(self, number):
            self._number = number + 2

        @property
        def number(self):
            return self._number

        @number.setter
        def number(self, new_num):
            self._number = new_num + 2

    whoops = Whoops(10)
    assert_equal(whoops.number, 12)

    whoops.number = 100
    assert_equal(whoops.number, 102)


# Literals and strings


@registry.case("Dict literals")
def dict_literals() -> None:
    ten = 10
    numbers = dict(ten=ten)
    assert_equal(numbers["ten"], ten)

    adder = {"add": lambda num1, num2: num1 + num2}
    assert_equal(adder["add"](4, 6), 10)


@registry.case("f-strings")
def f_strings() -> None:
    ten = 10
    assert_equal(f"My string is {ten}", "My string is 10")

    newline = """this is
  a newline"""
    assert_equal(newline, "this is\n  a newline")


# Unpacking and parameters


@registry.case("Unpacking mappings")
def unpacking_mappings() -> None:
    numbers = {"ten": 10}
    ten = numbers["ten"]
    assert_equal(ten, 10)

    def add(one, two):
        return one + two

    assert_equal(add(**{"one": 10, "two": 20}), 30)

    deep_nums = {"one": {"first": 100, "last": 200}}
    first, last = deep_nums["one"].values()
    assert_equal(first, 100)
    assert_equal(last, 200)


@registry.case("Unpacking sequences")
def unpacking_sequences() -> None:
    nums = [1, 2, 3, 4]
    one, two, *rest = nums
    assert_equal(one, 1)
    assert_equal(two, 2)
    assert_deep_equal(rest, [3, 4])

    def total(triple):
        first, second, third = triple
        return first + second + third

    assert_equal(total([1, 2, 3]), 6)


@registry.case("Default parameters")
def default_parameters() -> None:
    def add(one, two=10):
        return one + two

    assert_equal(add(10), 20)
    assert_equal(add(10, 20), 30)


@registry.case("Variadic parameters")
def variadic_parameters() -> None:
    def printout(*nums):
        return ", ".join(str(num) for num in nums)

    assert_equal(printout(1, 2, 3), "1, 2, 3")

    def add_length(first, *rest):
        return first + len(rest)

    assert_equal(add_length(10, 3, 4, 5), 13)


@registry.case("Argument spreading")
def argument_spreading() -> None:
    def add(a, b, c):
        return a + b + c

    nums = [1, 2, 3]
    assert_equal(add(*nums), 6)


registry.placeholder("Dicts as maps")
registry.placeholder("Sets")
registry.placeholder("Basic generator functions")


# Operators


@registry.case("Exponentiation operator")
def exponentiation_operator() -> None:
    assert_equal(2**8, 256)


@registry.case("Membership tests")
def membership_tests() -> None:
    numbers = [1, 2, 3, 4, 5, 6]
    assert_equal(4 in numbers, True)
    assert_equal(9 in numbers, False)

    assert_equal("a" in "aaa", True)
    assert_equal("a" in "bbb", False)


# Coroutines


async def _delayed_value(value, delay_s):
    await asyncio.sleep(delay_s)
    return value


@registry.case("Awaiting coroutines")
async def awaiting_coroutines() -> None:
    assert_equal(await _delayed_value(1, 0.05), 1)


@registry.case("Gathering coroutines")
async def gathering_coroutines() -> None:
    values = await asyncio.gather(_delayed_value("a", 0.02), _delayed_value("b", 0.01))
    assert_deep_equal(values, ["a", "b"])


# Builtin helpers still to cover

for _label in (
    "str repetition",
    "map",
    "filter",
    "functools.reduce",
    "for loops over lists",
    "next() with a default",
    "list.index",
    "dict.keys",
    "dict.values",
    "dict.items",
    "dict merging",
):
    registry.placeholder(_label)
