import pytest

from projection import GlobalParameters, OptionModel


def make_option(**overrides) -> OptionModel:
    values = dict(
        name="Option",
        initial_salary=0,
        salary_growth_rate=0,
        tuition_cost=0,
        tuition_years=0,
        years_delay=0,
    )
    values.update(overrides)
    return OptionModel(**values)


@pytest.fixture
def work_now():
    return make_option(name="Work now", initial_salary=75_000)


@pytest.fixture
def grad_school():
    return make_option(
        name="Grad school",
        initial_salary=90_000,
        salary_growth_rate=4,
        tuition_cost=40_000,
        tuition_years=2,
        years_delay=1,
    )


@pytest.fixture
def params():
    return GlobalParameters(years=10, market_rate=7)


@pytest.fixture
def option():
    """Factory for options with every numeric field defaulting to 0."""
    return make_option
