from __future__ import annotations
from dataclasses import dataclass
from math import pi, sin, radians, log10, isfinite

from .errors import InvalidArgument

# -----------------------------
# Physical constants & defaults
# -----------------------------
J_PER_MT_TNT = 4.184e15          # J in 1 megaton TNT
HIROSHIMA_MT = 0.015             # 15 kt
TSAR_BOMBA_MT = 50.0
DEFAULT_TARGET_DENSITY = 2500.0  # kg/m^3, sedimentary rock

# Collins et al. (2005) pi-scaling, simplified to energy form
K_CRATER = 1.161
CRATER_EXPONENT = 0.302
CRATER_DEPTH_RATIO = 5.0         # diameter : depth

BLAST_EXPONENT = 0.33
THERMAL_EXPONENT = 0.41

# Overpressure rings, coeff * E_Mt^0.33 (km)
OVERPRESSURE_COEFFS = {
    "blast_20psi":       2.2,
    "lung_damage":       1.5,
    "eardrum_rupture":   2.5,
    "building_collapse": 2.8,
    "home_collapse":     3.5,
    "tree_fall":         4.2,
}

# Thermal rings, coeff * E_Mt^0.41 (km)
THERMAL_COEFFS = {
    "third_degree_burns":  3.5,
    "second_degree_burns": 4.5,
    "clothes_ignition":    2.8,
    "tree_ignition":       3.2,
}

SHOCKWAVE_DB_CEILING = 280.0


@dataclass(frozen=True)
class ImpactParameters:
    diameter_m: float
    density_kgm3: float
    velocity_kms: float
    angle_deg: float  # to HORIZONTAL, 90 = vertical

    def __post_init__(self):
        for name in ("diameter_m", "density_kgm3", "velocity_kms"):
            value = getattr(self, name)
            if not isfinite(value) or value <= 0.0:
                raise InvalidArgument(f"{name} must be a positive finite number, got {value!r}.")
        if not isfinite(self.angle_deg) or not 0.0 < self.angle_deg <= 90.0:
            raise InvalidArgument(f"angle_deg must lie in (0, 90], got {self.angle_deg!r}.")

    @property
    def velocity_ms(self) -> float:
        return self.velocity_kms * 1000.0


@dataclass(frozen=True)
class PhysicalOutputs:
    mass_kg: float
    kinetic_energy_j: float
    energy_megatons: float
    crater_diameter_km: float
    crater_depth_m: float
    seismic_magnitude: float
    blast_radius_km: float
    thermal_radius_km: float
    fireball_diameter_km: float
    lung_damage_radius_km: float
    eardrum_rupture_radius_km: float
    building_collapse_radius_km: float
    home_collapse_radius_km: float
    tree_fall_radius_km: float
    second_degree_burns_radius_km: float
    clothes_ignition_radius_km: float
    tree_ignition_radius_km: float
    shockwave_decibels: float
    wind_speed_kms: float
    earthquake_perception_radius_km: float
    hiroshima_ratio: float
    recurrence_years: float


# ---------- Energetics ----------
def mass_kg(diameter_m: float, density_kgm3: float) -> float:
    radius_m = diameter_m / 2.0
    return (4.0 / 3.0) * pi * radius_m**3 * density_kgm3


def kinetic_energy_j(mass_kg: float, velocity_ms: float) -> float:
    """Velocity in m/s; convert from km/s before calling."""
    return 0.5 * mass_kg * velocity_ms**2


def energy_to_megatons(energy_j: float) -> float:
    return energy_j / J_PER_MT_TNT


def megatons_to_joules(energy_mt: float) -> float:
    return energy_mt * J_PER_MT_TNT


# ---------- Crater ----------
def crater_diameter_km(energy_mt: float, angle_deg: float,
                       target_density: float = DEFAULT_TARGET_DENSITY) -> float:
    """
    Final crater diameter (km) from impact energy, Collins et al. (2005).
    A 0° (grazing) angle gives exactly 0.
    """
    energy_j = megatons_to_joules(energy_mt)
    s = sin(radians(angle_deg))
    if s <= 0.0:
        return 0.0
    diameter_m = (K_CRATER
                  * energy_j ** CRATER_EXPONENT
                  * target_density ** -CRATER_EXPONENT
                  * s ** CRATER_EXPONENT)
    return diameter_m / 1000.0


def crater_depth_m(crater_diameter_km: float) -> float:
    return crater_diameter_km * 1000.0 / CRATER_DEPTH_RATIO


# ---------- Seismic ----------
def seismic_magnitude(energy_j: float) -> float:
    """Richter-equivalent magnitude. Not clamped: tiny impacts go negative."""
    return (2.0 / 3.0) * log10(energy_j) - 3.2


def earthquake_perception_radius_km(magnitude: float) -> float:
    return 10.0 ** (magnitude - 2.0)


# ---------- Blast / thermal ----------
def _overpressure_radius_km(ring: str, energy_mt: float) -> float:
    return OVERPRESSURE_COEFFS[ring] * energy_mt ** BLAST_EXPONENT


def _thermal_radius_km(ring: str, energy_mt: float) -> float:
    return THERMAL_COEFFS[ring] * energy_mt ** THERMAL_EXPONENT


def blast_radius_km(energy_mt: float) -> float:
    """20 psi overpressure radius."""
    return _overpressure_radius_km("blast_20psi", energy_mt)


def thermal_radius_km(energy_mt: float) -> float:
    """3rd-degree burn radius."""
    return _thermal_radius_km("third_degree_burns", energy_mt)


def fireball_diameter_km(energy_mt: float) -> float:
    return 1.9 * energy_mt ** 0.4


def lung_damage_radius_km(energy_mt: float) -> float:
    return _overpressure_radius_km("lung_damage", energy_mt)


def eardrum_rupture_radius_km(energy_mt: float) -> float:
    return _overpressure_radius_km("eardrum_rupture", energy_mt)


def building_collapse_radius_km(energy_mt: float) -> float:
    return _overpressure_radius_km("building_collapse", energy_mt)


def home_collapse_radius_km(energy_mt: float) -> float:
    return _overpressure_radius_km("home_collapse", energy_mt)


def tree_fall_radius_km(energy_mt: float) -> float:
    return _overpressure_radius_km("tree_fall", energy_mt)


def second_degree_burns_radius_km(energy_mt: float) -> float:
    return _thermal_radius_km("second_degree_burns", energy_mt)


def clothes_ignition_radius_km(energy_mt: float) -> float:
    return _thermal_radius_km("clothes_ignition", energy_mt)


def tree_ignition_radius_km(energy_mt: float) -> float:
    return _thermal_radius_km("tree_ignition", energy_mt)


def shockwave_decibels(energy_mt: float) -> float:
    pressure_psi = 20.0 * energy_mt ** BLAST_EXPONENT
    if pressure_psi <= 0.0:
        return 0.0
    db = 194.0 + 20.0 * log10(pressure_psi)
    return min(db, SHOCKWAVE_DB_CEILING)


def wind_speed_kms(energy_mt: float) -> float:
    return 0.35 * energy_mt ** 0.25


# ---------- Comparisons ----------
def compare_to_hiroshima(energy_mt: float) -> float:
    return energy_mt / HIROSHIMA_MT


def energy_comparison_label(energy_mt: float) -> str:
    ratio = compare_to_hiroshima(energy_mt)
    if ratio < 0.1:
        return "Small event (meteor)"
    if ratio < 1:
        return f"{ratio:.2f}× Hiroshima"
    if ratio < 100:
        return f"{ratio:.1f}× Hiroshima"
    if ratio < 1000:
        return f"{ratio:.0f}× Hiroshima"
    return f"{energy_mt / TSAR_BOMBA_MT:.1f}× Tsar Bomba"


# ---------- Recurrence ----------
def recurrence_interval_years(energy_mt: float) -> float:
    return float("inf") if energy_mt <= 0.0 else 109.0 * energy_mt ** 0.78


def frequency_label(energy_mt: float) -> str:
    if energy_mt < 1:
        return "About once a year"
    if energy_mt < 10:
        return "Once every ~10 years"
    if energy_mt < 100:
        return "Once every ~100 years"
    if energy_mt < 1000:
        return "Once every ~1 thousand years"
    if energy_mt < 10000:
        return "Once every ~10 thousand years"
    return "Once every ~1 million years or more"


# ---------- Convenience summary ----------
def compute_physical_outputs(params: ImpactParameters) -> PhysicalOutputs:
    m = mass_kg(params.diameter_m, params.density_kgm3)
    e_j = kinetic_energy_j(m, params.velocity_ms)
    e_mt = energy_to_megatons(e_j)
    crater_km = crater_diameter_km(e_mt, params.angle_deg)
    magnitude = seismic_magnitude(e_j)

    return PhysicalOutputs(
        mass_kg=m,
        kinetic_energy_j=e_j,
        energy_megatons=e_mt,
        crater_diameter_km=crater_km,
        crater_depth_m=crater_depth_m(crater_km),
        seismic_magnitude=magnitude,
        blast_radius_km=blast_radius_km(e_mt),
        thermal_radius_km=thermal_radius_km(e_mt),
        fireball_diameter_km=fireball_diameter_km(e_mt),
        lung_damage_radius_km=lung_damage_radius_km(e_mt),
        eardrum_rupture_radius_km=eardrum_rupture_radius_km(e_mt),
        building_collapse_radius_km=building_collapse_radius_km(e_mt),
        home_collapse_radius_km=home_collapse_radius_km(e_mt),
        tree_fall_radius_km=tree_fall_radius_km(e_mt),
        second_degree_burns_radius_km=second_degree_burns_radius_km(e_mt),
        clothes_ignition_radius_km=clothes_ignition_radius_km(e_mt),
        tree_ignition_radius_km=tree_ignition_radius_km(e_mt),
        shockwave_decibels=shockwave_decibels(e_mt),
        wind_speed_kms=wind_speed_kms(e_mt),
        earthquake_perception_radius_km=earthquake_perception_radius_km(magnitude),
        hiroshima_ratio=compare_to_hiroshima(e_mt),
        recurrence_years=recurrence_interval_years(e_mt),
    )
