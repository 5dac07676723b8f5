from __future__ import annotations
from dataclasses import dataclass, asdict
from math import pi
from typing import Literal

from .population import ImpactLocation, PopulationEstimator
from .scaling_laws import (
    ImpactParameters,
    PhysicalOutputs,
    compute_physical_outputs,
    energy_comparison_label,
    frequency_label,
)

Severity = Literal["critical", "high", "medium", "info"]


@dataclass(frozen=True)
class Metric:
    label: str
    value: float | str
    unit: str = ""


@dataclass(frozen=True)
class Casualties:
    deaths: int
    injured: int


@dataclass(frozen=True)
class DamageZoneSection:
    severity: Severity
    metrics: tuple[Metric, ...]
    comparison: str | None = None
    casualties: Casualties | None = None
    description: str | None = None


@dataclass(frozen=True)
class Summary:
    total_deaths: int
    total_injured: int
    total_area_km2: float
    event_scale_label: str


@dataclass(frozen=True)
class ImpactReport:
    crater: DamageZoneSection
    fireball: DamageZoneSection
    shockwave: DamageZoneSection
    windblast: DamageZoneSection
    earthquake: DamageZoneSection
    frequency: DamageZoneSection
    summary: Summary

    def to_dict(self) -> dict:
        return asdict(self)


# ---------- narrative bands ----------
def energy_comparison_text(energy_mt: float) -> str:
    if energy_mt < 1:
        return "Energy comparable to a small meteor"
    if energy_mt < 100:
        return "More energy than dozens of atomic bombs combined"
    if energy_mt < 1000:
        return "Energy comparable to a major volcanic eruption"
    return "Enough energy to disrupt the global climate for years"


def earthquake_description(magnitude: float) -> str:
    if magnitude < 4:
        return "Minor - rarely felt"
    if magnitude < 5:
        return "Moderate - minimal damage"
    if magnitude < 6:
        return "Strong - damage to structures"
    if magnitude < 7:
        return "Major - serious damage"
    if magnitude < 8:
        return "Great - widespread destruction"
    return "Massive - regional devastation"


def earthquake_comparison(magnitude: float) -> str:
    if magnitude >= 9:
        return "Comparable to the largest earthquakes on record (Japan 2011, Chile 1960)"
    if magnitude >= 8:
        return "Comparable to the San Francisco (1906) or Nepal (2015) earthquakes"
    if magnitude >= 7:
        return "Comparable to the Haiti earthquake (2010)"
    return "Moderate earthquake, felt over a wide area"


def _casualties(deaths: float, injured: float) -> Casualties:
    return Casualties(deaths=max(0, round(deaths)), injured=max(0, round(injured)))


class ImpactReportGenerator:
    """
    Damage-zone report for one simulation run.

    Casualties use a fixed per-zone heuristic, not a physical mortality
    model. Zones are evaluated independently; no ordering between crater,
    blast and thermal radii is assumed.
    """

    def __init__(self, params: ImpactParameters, location: ImpactLocation,
                 outputs: PhysicalOutputs):
        self.params = params
        self.location = location
        self.o = outputs
        self.pop = PopulationEstimator(location)

    def _pop(self, radius_km: float) -> int:
        return self.pop.estimate_population_in_radius(radius_km)

    def generate(self) -> ImpactReport:
        print(f"[report] lat={self.location.lat} lon={self.location.lon} "
              f"energy_mt={self.o.energy_megatons:.2f} area_type={self.pop.area_type}")
        report = ImpactReport(
            crater=self.crater_section(),
            fireball=self.fireball_section(),
            shockwave=self.shockwave_section(),
            windblast=self.windblast_section(),
            earthquake=self.earthquake_section(),
            frequency=self.frequency_section(),
            summary=self.summary(),
        )
        print(f"[report.done] deaths={report.summary.total_deaths} "
              f"injured={report.summary.total_injured} scale={report.summary.event_scale_label!r}")
        return report

    # ---------- sections ----------
    def crater_section(self) -> DamageZoneSection:
        diameter = self.o.crater_diameter_km
        vaporized = self._pop(diameter / 2.0)
        return DamageZoneSection(
            severity="critical",
            metrics=(
                Metric("Crater diameter", diameter, "km"),
                Metric("Depth", self.o.crater_depth_m, "m"),
                Metric("Impact velocity", self.params.velocity_kms, "km/s"),
                Metric("Energy released", self.o.energy_megatons, "Mt TNT"),
                Metric("Population vaporized", vaporized, "people"),
            ),
            comparison=energy_comparison_text(self.o.energy_megatons),
            casualties=_casualties(vaporized, 0),
        )

    def fireball_section(self) -> DamageZoneSection:
        thermal = self.o.thermal_radius_km
        deaths = self._pop(thermal)
        burns_3rd = max(0, deaths - self._pop(thermal * 0.7))
        burns_2nd = max(0, self._pop(self.o.second_degree_burns_radius_km) - deaths)
        return DamageZoneSection(
            severity="high",
            metrics=(
                Metric("Fireball diameter", self.o.fireball_diameter_km, "km"),
                Metric("Deaths from thermal radiation", deaths, "people"),
                Metric("3rd-degree burns", burns_3rd, "people"),
                Metric("2nd-degree burns", burns_2nd, "people"),
                Metric("Clothes ignition radius", self.o.clothes_ignition_radius_km, "km"),
                Metric("Tree ignition radius", self.o.tree_ignition_radius_km, "km"),
            ),
            comparison="Thermal radiation causes severe burns even at great distances",
            casualties=_casualties(deaths, burns_2nd),
        )

    def shockwave_section(self) -> DamageZoneSection:
        deaths = self._pop(self.o.building_collapse_radius_km)
        injured = 0.5 * self._pop(self.o.eardrum_rupture_radius_km)
        return DamageZoneSection(
            severity="high",
            metrics=(
                Metric("Sound level", self.o.shockwave_decibels, "dB"),
                Metric("Deaths from overpressure", deaths, "people"),
                Metric("Lung damage radius", self.o.lung_damage_radius_km, "km"),
                Metric("Eardrum rupture radius", self.o.eardrum_rupture_radius_km, "km"),
                Metric("Building collapse radius", self.o.building_collapse_radius_km, "km"),
                Metric("Home collapse radius", self.o.home_collapse_radius_km, "km"),
            ),
            comparison="The shockwave travels faster than sound",
            casualties=_casualties(deaths, injured),
        )

    def windblast_section(self) -> DamageZoneSection:
        home = self.o.home_collapse_radius_km
        deaths = self._pop(home * 0.6)
        return DamageZoneSection(
            severity="medium",
            metrics=(
                Metric("Peak wind speed", self.o.wind_speed_kms, "km/s"),
                Metric("Peak wind speed (km/h)", self.o.wind_speed_kms * 3600.0, "km/h"),
                Metric("Deaths from wind", deaths, "people"),
                Metric("Total destruction radius", home * 0.4, "km"),
                Metric("EF5-equivalent zone", home * 0.7, "km"),
                Metric("Tree fall radius", self.o.tree_fall_radius_km, "km"),
            ),
            comparison="Winds stronger than an EF5 tornado",
            casualties=_casualties(deaths, deaths * 1.5),
        )

    def earthquake_section(self) -> DamageZoneSection:
        magnitude = self.o.seismic_magnitude
        perception = self.o.earthquake_perception_radius_km
        deaths = self._pop(perception * 0.1) * 0.05
        return DamageZoneSection(
            severity="high" if magnitude >= 7 else "medium",
            metrics=(
                Metric("Magnitude", magnitude, "Richter"),
                Metric("Deaths from earthquake", round(deaths), "people"),
                Metric("Perception radius", perception, "km"),
            ),
            comparison=earthquake_comparison(magnitude),
            casualties=_casualties(deaths, deaths * 3),
            description=earthquake_description(magnitude),
        )

    def frequency_section(self) -> DamageZoneSection:
        return DamageZoneSection(
            severity="info",
            metrics=(
                Metric("Estimated frequency", frequency_label(self.o.energy_megatons)),
                Metric("Mean recurrence interval", self.o.recurrence_years, "years"),
            ),
            comparison="Impacts of this size are rare but inevitable on geological timescales",
            description="Based on near-Earth object impact statistics",
        )

    def summary(self) -> Summary:
        # Zones overlap on purpose: an upper bound, not a partition.
        deaths = (self._pop(self.o.crater_diameter_km / 2.0)
                  + self._pop(self.o.thermal_radius_km) * 0.8
                  + self._pop(self.o.blast_radius_km) * 0.6)
        return Summary(
            total_deaths=round(deaths),
            total_injured=round(deaths * 2.5),
            total_area_km2=pi * self.o.blast_radius_km**2,
            event_scale_label=energy_comparison_label(self.o.energy_megatons),
        )


def generate_report(params: ImpactParameters, location: ImpactLocation,
                    outputs: PhysicalOutputs) -> ImpactReport:
    return ImpactReportGenerator(params, location, outputs).generate()


def simulate(params: ImpactParameters, location: ImpactLocation) -> tuple[PhysicalOutputs, ImpactReport]:
    outputs = compute_physical_outputs(params)
    return outputs, generate_report(params, location, outputs)
