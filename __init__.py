from .codetheta.codes import named_code, SelfDualCode
from .codetheta.code_automorphism import CodeAutomorphism, subgroup_theta_series
from .codetheta.database import LatticeDatabase
from .codetheta.driver import report_code_classes, report_lattice_classes, report_subgroups
from .codetheta.lattice import EvenLattice
from .codetheta.orbits import orbit_types, OrbitType
from .codetheta.series import EtaProduct, QExpansion
from .codetheta.voa import OrderDoublingError, voa_character, voa_characters
