from __future__ import annotations

from typing import Sequence

from ppm_generator.models import PPMFormInputs

# Panca cinta (Kurikulum Berbasis Cinta)
VALUES = (
    "Cinta kepada Allah dan Rasul-Nya",
    "Cinta Ilmu",
    "Cinta Diri dan Sesama",
    "Cinta Lingkungan",
    "Cinta Tanah Air",
)

PROFILE_DIMENSIONS = (
    "Keimanan dan Ketakwaan terhadap Tuhan YME",
    "Kewargaan",
    "Penalaran Kritis",
    "Kreativitas",
    "Kolaborasi",
    "Kemandirian",
    "Kesehatan",
    "Komunikasi",
)

BASE = """\
Anda adalah seorang ahli pendidikan yang bertugas menyusun Perencanaan Pembelajaran Mendalam (PPM) yang komprehensif.
PPM ini harus mengintegrasikan pendekatan pembelajaran mendalam (mindful, meaningful, joyful) dan nilai-nilai cinta.
Berikan output dalam format Markdown yang mudah dibaca.
"""

DEEP_LEARNING_INTRO = (
    "Pembelajaran mendalam (deep learning) adalah pendekatan holistik yang mengintegrasikan "
    "pembelajaran penuh kesadaran (mindful), pembelajaran bermakna (meaningful), dan pembelajaran "
    "menyenangkan (joyful). Ketiga komponen ini saling berkaitan dan memperkuat satu sama lain untuk "
    "menciptakan lingkungan belajar yang efektif dan menyenangkan. Pembelajaran yang bermakna akan "
    "meningkatkan motivasi, pembelajaran yang sadar akan membantu siswa fokus, dan pembelajaran yang "
    "menyenangkan akan membuat mereka lebih menikmati prosesnya. Pendekatan ini mengintegrasikan olah "
    "pikir, olah hati, olah rasa, dan olah raga secara terpadu untuk pembelajaran yang lebih holistik."
)


def escape_backticks(text: str) -> str:
    """
    Backslash-escape every backtick so a value can never close a
    backtick-delimited block early.
    """
    return (text or "").replace("`", "\\`")


def _quoted_list(items: Sequence[str]) -> str:
    return ", ".join(f'"{escape_backticks(item)}"' for item in items)


def build_ppm_prompt(
    inputs: PPMFormInputs,
    *,
    values: Sequence[str] = VALUES,
    dimensions: Sequence[str] = PROFILE_DIMENSIONS,
) -> str:
    e = escape_backticks
    institution = e(inputs.institution_name)
    teacher = e(inputs.teacher_name)
    subject = e(inputs.subject)
    phase = e(inputs.phase)
    grade = e(inputs.grade)
    semester = e(inputs.semester)
    time_allocation = e(inputs.time_allocation)
    outcomes = e(inputs.learning_outcomes)
    objectives = e(inputs.learning_objectives)
    content = e(inputs.content)
    values_txt = _quoted_list(values)
    dimensions_txt = _quoted_list(dimensions)

    return f"""{BASE}
Berikut adalah data masukan untuk PPM:
Nama Madrasah: {institution}
Nama Guru: {teacher}
Mata Pelajaran: {subject}
Fase: {phase}
Kelas: {grade}
Semester: {semester}
Alokasi Waktu: {time_allocation}
Capaian Pembelajaran: {outcomes}
Tujuan Pembelajaran: {objectives}
Materi Pembelajaran: {content}

Hasilkan Perencanaan Pembelajaran Mendalam (PPM) dengan sistematika dan integrasi sebagai berikut:

# Perencanaan Pembelajaran Mendalam

## I. IDENTITAS
*   **Nama Madrasah**: {institution}
*   **Nama Guru**: {teacher}
*   **Mata Pelajaran**: {subject}
*   **Fase**: {phase}
*   **Kelas**: {grade}
*   **Semester**: {semester}
*   **Alokasi Waktu**: {time_allocation}

### 1. Materi Pelajaran
Jelaskan materi pembelajaran "{content}" yang diintegrasikan dengan nilai-nilai cinta berikut: {values_txt}.

### 2. Dimensi Profil Lulusan
Pilih dan jelaskan dimensi profil lulusan yang paling sesuai dengan Tujuan Pembelajaran "{objectives}" dari daftar berikut, sertakan penjelasannya untuk setiap dimensi yang dipilih: {dimensions_txt}.

### 3. Pokok Materi
{content}

## II. DESAIN PEMBELAJARAN
{DEEP_LEARNING_INTRO}

### 1. Capaian Pembelajaran
Jelaskan capaian pembelajaran "{outcomes}" yang diintegrasikan dengan nilai-nilai cinta atau konsep KBC (Karakter, Berpikir Kritis, dan Kreativitas).

### 2. Lintas Disiplin Ilmu
Secara otomatis, identifikasi dan jelaskan mata pelajaran lain yang sesuai untuk berkolaborasi atau memiliki keterkaitan dengan tujuan pembelajaran "{objectives}".

### 3. Tujuan Pembelajaran
Jelaskan tujuan pembelajaran "{objectives}" yang diintegrasikan dengan nilai-nilai cinta atau konsep KBC (Karakter, Berpikir Kritis, dan Kreativitas).

### 4. Praktik Pedagogis
Berdasarkan Tujuan Pembelajaran "{objectives}" dan prinsip pembelajaran mendalam, jelaskan secara otomatis:
a. **Model**: Model pembelajaran yang sesuai dan disarankan oleh pembelajaran mendalam.
b. **Strategi**: Strategi pembelajaran yang efektif.
c. **Metode**: Metode pembelajaran yang mendukung.

### 5. Kemitraan Pembelajaran
Secara otomatis, identifikasi dan jelaskan pihak-pihak yang sesuai untuk berkolaborasi dalam pembelajaran ini:
a. **Internal Sekolah**: Contohnya Laboran sekolah, Guru lain (sebutkan mata pelajaran jika relevan), atau staf lain. Jelaskan peran dan kontribusinya.
b. **Eksternal Sekolah**: Pihak dari luar sekolah (misalnya lembaga, komunitas, pakar). Jelaskan siapa, apa, dan bagaimana mereka dapat mendukung pembelajaran.

### 6. Lingkungan Pembelajaran
a. **Fisik**: Jelaskan pengaturan lingkungan fisik kelas atau area belajar yang mendukung pembelajaran mendalam.
b. **Virtual**: Identifikasi dan jelaskan platform atau sumber daya virtual yang mendukung pembelajaran.
c. **Budaya Belajar**: Jelaskan bagaimana menciptakan budaya belajar yang positif, inklusif, dan mendorong eksplorasi.

### 7. Pemanfaatan Digital
Identifikasi dan jelaskan pemanfaatan media digital yang relevan dengan materi pembelajaran "{content}" dan mendukung tujuan pembelajaran.

## III. PENGALAMAN BELAJAR
Sajikan pengalaman belajar dalam tiga tahapan, dengan mengintegrasikan prinsip berkesadaran (mindful), bermakna (meaningful), dan menggembirakan (joyful) ke dalam setiap kegiatan. Sesuaikan alokasi waktu secara proporsional dari total "{time_allocation}".

### 1. Kegiatan Awal (Alokasi Waktu: sekitar X menit)
Jelaskan kegiatan awal yang berkesadaran, bermakna, dan menggembirakan.

### 2. Kegiatan Inti (Alokasi Waktu: sekitar Y menit)
Jelaskan kegiatan inti yang mendalam, melibatkan siswa dalam pemecahan masalah, diskusi, proyek, dll., dengan mengintegrasikan prinsip berkesadaran, bermakna, dan menggembirakan.

### 3. Kegiatan Penutup (Alokasi Waktu: sekitar Z menit)
Jelaskan kegiatan penutup yang menguatkan pemahaman, refleksi, dan tindak lanjut, dengan mengintegrasikan prinsip berkesadaran, bermakna, dan menggembirakan.

## IV. ASESMEN PEMBELAJARAN
Rancang asesmen yang relevan dan sesuai dengan materi dan tujuan pembelajaran.

### 1. Asesmen Awal Pembelajaran
Jelaskan bentuk asesmen awal yang paling sesuai dengan materi "{content}" dan tujuan pembelajaran "{objectives}".

### 2. Asesmen Proses Pembelajaran (Formatif dan Sikap)
Jelaskan bentuk asesmen formatif dan penilaian sikap yang dilakukan selama proses pembelajaran.

### 3. Asesmen Akhir Pembelajaran (Sumatif)
Jelaskan bentuk asesmen sumatif yang paling sesuai untuk mengukur pencapaian tujuan pembelajaran.

## Lampiran

### 1. Lembar Kerja Peserta Didik (LKPD)
Buatkan sebuah Lembar Kerja Peserta Didik (LKPD) yang menarik dan relevan dengan materi "{content}" dan tujuan pembelajaran "{objectives}".
LKPD harus memiliki judul yang sesuai dan sebuah tabel lengkap dengan isi untuk bagian-bagian berikut:
-   **Tujuan Kegiatan**: Jelaskan tujuan spesifik kegiatan LKPD ini.
-   **Alat dan Bahan**: Daftar alat dan bahan yang diperlukan.
-   **Langkah Kerja**: Panduan langkah demi langkah untuk siswa.
-   **Ruang Jawaban/Diskusi**: Sediakan kolom atau bagian untuk siswa menuliskan jawaban, hasil observasi, atau poin diskusi.

### 2. Instrumen/Rubrik Penilaian
Buat rubrik penilaian lengkap dengan kriteria, indikator, dan skala penilaian (misalnya: Sangat Baik, Baik, Cukup, Kurang) untuk:

A. **Rubrik Penilaian Kognitif**:
   -   Sesuai dengan materi "{content}" dan tujuan pembelajaran "{objectives}".
   -   Sertakan setidaknya 3-5 kriteria yang mengukur pemahaman, penerapan, analisis, atau evaluasi.

B. **Rubrik Penilaian Sikap**:
   -   Berdasarkan nilai-nilai cinta ({values_txt}) dan dimensi profil lulusan ({dimensions_txt}).
   -   Sertakan kriteria seperti kerjasama, tanggung jawab, kejujuran, atau kepedulian.

C. **Rubrik Penilaian Presentasi**:
   -   Rubrik umum yang relevan jika ada kegiatan presentasi.
   -   Sertakan kriteria seperti kelancaran berbicara, kejelasan materi, kreativitas, dan penguasaan audiens.

Pastikan semua penjelasan terperinci dan formatnya dalam Markdown yang rapi.
"""
