import pytest

from spacevoxel.assets.content import ContentManager
from spacevoxel.errors import ConfigurationMissingError, InvalidArgumentError
from spacevoxel.materials import tier_rules
from spacevoxel.materials.enums import MaterialCategory, MaterialProperty, MaterialSubtype, subtypes_for
from spacevoxel.materials.generator import MaterialGenerator, choose_category, make_display_name
from spacevoxel.materials.planet import PlanetProfile
from spacevoxel.materials.properties import slot_index
from spacevoxel.math.rng import DeterministicRng


@pytest.fixture(scope="module")
def content():
    manager = ContentManager()
    manager.load()
    return manager


@pytest.fixture
def generator(content):
    return content.material_generator()


def _metal_only_planet(**overrides):
    values = dict(
        weight_metal=1.0,
        weight_stone_silicate=0.0,
        weight_sedimentary_carbon=0.0,
        weight_liquid=0.0,
        weight_gas=0.0,
    )
    values.update(overrides)
    return PlanetProfile(**values)


def test_same_inputs_give_identical_material(generator):
    planet = PlanetProfile(planet_seed=12345)
    first = generator.generate(planet, 42, "Ore")
    second = generator.generate(planet, 42, "Ore")
    assert first == second
    assert str(first) == str(second)


def test_different_node_seeds_differ(generator):
    planet = PlanetProfile(planet_seed=12345)
    results = {generator.generate(planet, seed, "Ore").values for seed in range(20)}
    assert len(results) > 1


def test_tier_zero_invariants_hold_across_seeds(content, generator):
    density = slot_index(MaterialProperty.Density)
    for planet in content.planets.all():
        for node_seed in range(60):
            material = generator.generate(planet, node_seed, "Node")
            props = material.properties
            for index, value in enumerate(props):
                assert 0.0 <= value <= 1.0
                if index != density:
                    assert value <= tier_rules.HARD_CAP + 1e-9
            assert tier_rules.DENSITY_MIN <= props[density] <= tier_rules.DENSITY_MAX
            assert sum(1 for value in props if value > tier_rules.DOMINANT_THRESHOLD) <= 1
            assert props.min_value() <= tier_rules.WEAKNESS_REQUIRED_MAX
            assert 0.0 <= material.abundance <= 1.0
            assert material.subtype in subtypes_for(material.category)
            template = content.templates.get(material.category)
            assert material.dominant_property in template.dominant_candidates
            assert material.weakness_property in template.weakness_candidates


def test_category_follows_planet_weights(generator):
    planet = _metal_only_planet()
    for node_seed in range(25):
        assert generator.generate(planet, node_seed, "Ore").category is MaterialCategory.Metal


def test_zero_weights_fall_back_to_stone():
    planet = _metal_only_planet(weight_metal=0.0)
    assert choose_category(planet, DeterministicRng(1)) is MaterialCategory.StoneSilicate


def test_display_name_format(generator):
    material = generator.generate(_metal_only_planet(), 123456, "Ferrite")
    expected = f"Ferrite (Metal:{material.subtype.name}) #3456"
    assert material.display_name == expected
    assert str(material).startswith(f"{expected} [Metal/{material.subtype.name}] Dom=")


def test_make_display_name_pads_seed():
    name = make_display_name(None, MaterialCategory.Gas, MaterialSubtype.InertGas, 7)
    assert name == " (Gas:InertGas) #0007"


def test_properties_are_returned_as_copy(generator):
    material = generator.generate(_metal_only_planet(), 5, "Ore")
    props = material.properties
    props[MaterialProperty.Strength] = 99.0
    assert material.value(MaterialProperty.Strength) <= 1.0


def test_missing_planet_raises(generator):
    with pytest.raises(InvalidArgumentError):
        generator.generate(None, 1, "Ore")


def test_missing_template_raises():
    generator = MaterialGenerator({})
    with pytest.raises(ConfigurationMissingError):
        generator.generate(_metal_only_planet(), 1, "Ore")


def test_to_dict_round_trips_names(generator):
    material = generator.generate(_metal_only_planet(), 9, "Ore")
    data = material.to_dict()
    assert data["category"] == "Metal"
    assert set(data["properties"]) == {
        "Strength",
        "MaxTemperature",
        "ThermalConductivity",
        "ElectricalConductivity",
        "ErosionResistance",
        "CorrosionResistance",
        "Density",
        "Manufacturability",
    }


def test_stone_only_weights_always_pick_stone():
    planet = _metal_only_planet(weight_metal=0.0, weight_stone_silicate=1.0)
    rng = DeterministicRng(12345)
    for _ in range(200):
        assert choose_category(planet, rng) is MaterialCategory.StoneSilicate


def test_reference_material_for_fixed_seeds(generator):
    material = generator.generate(_metal_only_planet(), 42, "Ferrite")
    assert material.display_name == "Ferrite (Metal:SulfideOre) #0042"
    assert material.subtype is MaterialSubtype.SulfideOre
    assert material.dominant_property is MaterialProperty.ElectricalConductivity
    assert material.weakness_property is MaterialProperty.CorrosionResistance
    assert material.values == pytest.approx(
        (
            0.65482279181480407,
            0.5730682075023652,
            0.60082475423812864,
            0.79026313543319693,
            0.43414345383644104,
            0.12472575664520261,
            0.70080837726593015,
            0.54581132173538216,
        ),
        abs=1e-12,
    )
    assert material.abundance == pytest.approx(0.22106166779994962, abs=1e-12)
