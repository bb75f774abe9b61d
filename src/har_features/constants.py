# Human activity labels produced by the UCI-HAR trained models (index-aligned: 0..5)
ACTIVITY_LABELS = [
    "WALKING", "WALKING_UPSTAIRS", "WALKING_DOWNSTAIRS",
    "SITTING", "STANDING", "LAYING",
]

# Label used before the first window has been classified
IDLE_ACTIVITY = "NOT_STARTED"

# SAMPLING / WINDOWING CONFIGURATION

# Nominal sensor sampling rate (Hz). UCI-HAR was recorded at 50 Hz.
SAMPLE_RATE_HZ = 50.0

# Window duration in seconds: 2.56 s * 50 Hz = 128 samples per window
WINDOW_DURATION_S = 2.56

# Fraction of each window shared with the next one
# Example: 128 samples * 0.5 -> slide forward by 64 samples
OVERLAP_RATIO = 0.5

# GRAVITY SEPARATION

# Smoothing constant of the single-pole low-pass filter.
# Roughly a 0.3 Hz cutoff at 50 Hz sampling.
FILTER_ALPHA = 0.8

# FEATURE VECTOR

# Input dimension of the downstream classifier (UCI-HAR features.txt)
FEATURE_DIM = 561

# Autoregressive coefficients reserved per axis (Burg order 4 in UCI-HAR)
N_AR_COEFFS = 4

# Spectral band slots reserved per frequency-domain signal
N_SPECTRAL_BANDS = 3

# Percentiles reported by statistics.percentiles()
PERCENTILES = (10, 25, 50, 75, 90)

# RULE-BASED FALLBACK (acceleration level in m/s^2)
RULE_RUNNING_THRESHOLD = 15.0
RULE_WALKING_THRESHOLD = 10.5
RULE_STANDING_THRESHOLD = 9.5

# SAMPLE RATE MONITOR

# Number of timestamp intervals averaged before a new rate is reported
RATE_MONITOR_INTERVALS = 100

# EXPORT

# CSV header written by recorder.export_csv and read by data_loader
RECORDING_COLUMNS = [
    "timestamp_ms", "accX", "accY", "accZ",
    "gyroX", "gyroY", "gyroZ", "activity_label",
]
RAW_SENSOR_COLUMNS = RECORDING_COLUMNS[1:7]
EXPORT_FILE_PATTERN = "HAR_Data_{timestamp}.csv"
EXPORT_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"

# PHYPHOX ACQUISITION

# Buffer names in the phyphox "Accelerometer & Gyroscope" experiment
PHYPHOX_SENSORS = ["accX", "accY", "accZ", "gyroX", "gyroY", "gyroZ"]

# Seconds between polls, and back-off after an error
PHYPHOX_POLL_INTERVAL_S = 0.02
PHYPHOX_ERROR_BACKOFF_S = 2.0
PHYPHOX_REQUEST_TIMEOUT_S = 2.0
