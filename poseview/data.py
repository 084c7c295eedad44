"""Reference camera intrinsics and a set of recorded pose estimates."""

import numpy as np

CAMERA_MATRIX = np.array(
    [
        [1901.634, 0.000, 1227.497],
        [0.000, 1901.634, 998.426],
        [0.000, 0.000, 1.000],
    ],
    dtype=np.float64,
)

_RAW_POSES = (
    ((1.89555, 0.516884, 1.95006), (-2.24814, -17.5293, -42.9695)),
    ((1.90375, 0.515313, 1.93511), (-12.4621, -17.8111, -42.9720)),
    ((1.90259, 0.514211, 1.93388), (-22.8503, -17.4467, -42.9661)),
    ((1.91592, 0.512709, 1.91910), (-33.6827, -17.1720, -42.8695)),
    ((1.91013, 0.510408, 1.92900), (-42.9085, -16.5996, -43.3746)),
    ((1.90693, 0.512966, 1.93315), (-52.8615, -16.8373, -43.3465)),
    ((1.90349, 0.515020, 1.93607), (-62.7236, -17.2065, -43.4505)),
    ((1.90495, 0.514742, 1.93638), (-72.8131, -16.9420, -43.7959)),
    ((1.90884, 0.515185, 1.92850), (-83.1373, -16.8592, -43.5902)),
    ((1.90542, 0.511276, 1.93236), (-92.9025, -16.7532, -44.1121)),
    ((1.89647, 0.517504, 1.94961), (-2.35876, -17.4905, -42.9590)),
    ((1.91194, 0.512061, 1.93264), (-13.3721, -17.1905, -42.8143)),
    ((1.91036, 0.508157, 1.93340), (-23.2503, -16.8630, -43.0055)),
    ((1.92063, 0.507546, 1.92007), (-33.4825, -16.8528, -42.7321)),
    ((1.91577, 0.508808, 1.92651), (-43.3425, -16.5581, -43.0667)),
    ((1.91104, 0.510234, 1.93174), (-53.0143, -16.7041, -43.2175)),
    ((1.90815, 0.511178, 1.93514), (-62.7848, -16.9899, -43.5800)),
    ((1.90894, 0.512011, 1.93485), (-72.9918, -16.7889, -43.8480)),
    ((1.91061, 0.515007, 1.92633), (-83.3041, -17.0002, -43.4516)),
    ((1.90501, 0.511783, 1.93165), (-92.8829, -16.8107, -44.1747)),
    ((1.89473, 0.518436, 1.94914), (-2.26642, -17.4884, -43.0098)),
    ((1.90534, 0.515551, 1.93372), (-12.5142, -17.8050, -42.9945)),
    ((1.90138, 0.516064, 1.93304), (-22.3773, -18.1651, -42.7479)),
    ((1.91901, 0.512952, 1.91641), (-33.8181, -17.4067, -42.9248)),
    ((1.91083, 0.510983, 1.92817), (-42.8800, -16.6979, -43.3440)),
    ((1.90681, 0.512623, 1.93255), (-52.7686, -16.7594, -43.4265)),
    ((1.90562, 0.514227, 1.93407), (-62.8031, -16.9837, -43.3374)),
    ((1.90414, 0.515325, 1.93520), (-72.6567, -17.1794, -43.7677)),
    ((1.91220, 0.515101, 1.92638), (-83.3703, -16.8997, -43.3448)),
    ((1.90399, 0.511885, 1.93326), (-92.5893, -16.8291, -44.1271)),
    ((1.89667, 0.518205, 1.94865), (-2.39212, -17.5189, -42.9924)),
    ((1.90936, 0.513948, 1.93306), (-12.9091, -17.5299, -42.9759)),
    ((1.90960, 0.510749, 1.93186), (-23.2272, -17.0124, -42.9204)),
    ((1.92151, 0.510566, 1.91652), (-33.9143, -16.9571, -42.8052)),
    ((1.91409, 0.510940, 1.92485), (-43.2081, -16.7245, -42.9967)),
    ((1.90821, 0.513852, 1.92978), (-52.9257, -16.9549, -43.1721)),
    ((1.90668, 0.514336, 1.93321), (-62.8748, -17.0038, -43.4344)),
    ((1.90628, 0.514923, 1.93412), (-72.8699, -16.9054, -43.6785)),
    ((1.90991, 0.516563, 1.92521), (-83.2756, -17.1546, -43.2926)),
    ((1.90550, 0.511768, 1.93217), (-92.8634, -16.6007, -44.0640)),
    ((1.90494, 0.516027, 1.94486), (-3.61560, -16.7930, -43.1831)),
    ((1.91276, 0.516767, 1.92572), (-13.9677, -17.9609, -42.7592)),
    ((1.90669, 0.513080, 1.93124), (-22.9011, -17.4499, -42.8723)),
    ((1.91423, 0.513312, 1.91847), (-33.0614, -17.5337, -42.4950)),
    ((1.91418, 0.511242, 1.92415), (-43.3161, -16.6331, -43.0445)),
    ((1.90698, 0.512590, 1.93127), (-52.6316, -16.8589, -43.3232)),
    ((1.90719, 0.513937, 1.93309), (-62.9281, -16.9241, -43.4345)),
    ((1.90529, 0.515770, 1.93429), (-72.8564, -17.0461, -43.8272)),
    ((1.90851, 0.514906, 1.92904), (-82.9266, -16.8378, -43.6350)),
    ((1.90463, 0.511929, 1.93327), (-92.7762, -16.6286, -44.1585)),
)

# Each pose is a (rvec, tvec) pair of Rodrigues rotation and translation.
POSES = [
    (np.array(rvec, dtype=np.float64), np.array(tvec, dtype=np.float64))
    for rvec, tvec in _RAW_POSES
]