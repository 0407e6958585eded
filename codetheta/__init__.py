from .assembly import code_theta_series, orbit_eta_product
from .code_automorphism import CodeAutomorphism, negated_set, signed_permutation_matrix, subgroup_theta_series
from .codes import named_code, SelfDualCode, support
from .database import LatticeDatabase
from .driver import report_code_classes, report_lattice_classes, report_subgroups
from .lattice import CodeLattice, EvenLattice, LatticeAutomorphism, LatticeAutomorphismGroup
from .orbits import is_orbit_partition, Orbit, orbit_type_signature, orbit_types, OrbitType
from .series import EtaProduct, frame_shape, QExpansion
from .voa import construct_order_doubling_kernel, has_order_doubling, kernel_for_order_doubling, KernelConstruction, OrderDoublingError, OrderDoublingFailure, parity_form, voa_character, voa_characters
