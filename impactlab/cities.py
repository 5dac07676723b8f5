from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class City:
    name: str
    lat: float
    lon: float
    population: int


# Top-50 metropolitan areas (population of the urban agglomeration).
# Order matters: area classification takes the first city within range.
MAJOR_CITIES: tuple[City, ...] = (
    City("Tokyo",            35.6762,  139.6503, 37_400_068),
    City("Delhi",            28.7041,   77.1025, 28_514_000),
    City("Shanghai",         31.2304,  121.4737, 25_582_000),
    City("São Paulo",       -23.5505,  -46.6333, 21_650_000),
    City("Mexico City",      19.4326,  -99.1332, 21_581_000),
    City("Cairo",            30.0444,   31.2357, 20_076_000),
    City("Mumbai",           19.0760,   72.8777, 19_980_000),
    City("Beijing",          39.9042,  116.4074, 19_618_000),
    City("Dhaka",            23.8103,   90.4125, 19_578_000),
    City("Osaka",            34.6937,  135.5023, 19_281_000),
    City("New York",         40.7128,  -74.0060, 18_819_000),
    City("Karachi",          24.8607,   67.0011, 15_400_000),
    City("Buenos Aires",    -34.6037,  -58.3816, 14_967_000),
    City("Chongqing",        29.4316,  106.9123, 14_838_000),
    City("Istanbul",         41.0082,   28.9784, 14_751_000),
    City("Kolkata",          22.5726,   88.3639, 14_681_000),
    City("Manila",           14.5995,  120.9842, 13_482_000),
    City("Lagos",             6.5244,    3.3792, 13_463_000),
    City("Rio de Janeiro",  -22.9068,  -43.1729, 13_293_000),
    City("Tianjin",          39.3434,  117.3616, 13_215_000),
    City("Kinshasa",         -4.4419,   15.2663, 13_171_000),
    City("Guangzhou",        23.1291,  113.2644, 12_638_000),
    City("Los Angeles",      34.0522, -118.2437, 12_458_000),
    City("Moscow",           55.7558,   37.6173, 12_410_000),
    City("Shenzhen",         22.5431,  114.0579, 11_908_000),
    City("Lahore",           31.5204,   74.3587, 11_126_000),
    City("Bangalore",        12.9716,   77.5946, 11_440_000),
    City("Paris",            48.8566,    2.3522, 10_901_000),
    City("Bogotá",            4.7110,  -74.0721, 10_574_000),
    City("Jakarta",          -6.2088,  106.8456, 10_517_000),
    City("Chennai",          13.0827,   80.2707, 10_456_000),
    City("Lima",            -12.0464,  -77.0428, 10_391_000),
    City("Bangkok",          13.7563,  100.5018, 10_156_000),
    City("London",           51.5074,   -0.1278,  9_046_000),
    City("Hyderabad",        17.3850,   78.4867,  9_746_000),
    City("Tehran",           35.6892,   51.3890,  8_896_000),
    City("Chicago",          41.8781,  -87.6298,  8_864_000),
    City("Chengdu",          30.5728,  104.0668,  8_813_000),
    City("Nanjing",          32.0603,  118.7969,  8_245_000),
    City("Wuhan",            30.5928,  114.3055,  8_176_000),
    City("Ho Chi Minh City", 10.8231,  106.6297,  8_145_000),
    City("Luanda",           -8.8383,   13.2344,  7_774_000),
    City("Ahmedabad",        23.0225,   72.5714,  7_681_000),
    City("Hong Kong",        22.3193,  114.1694,  7_429_000),
    City("Hangzhou",         30.2741,  120.1551,  7_236_000),
    City("Madrid",           40.4168,   -3.7038,  6_497_000),
    City("Toronto",          43.6532,  -79.3832,  6_082_000),
    City("Barcelona",        41.3851,    2.1734,  5_494_000),
    City("Miami",            25.7617,  -80.1918,  6_066_000),
    City("Philadelphia",     39.9526,  -75.1652,  5_695_000),
)
